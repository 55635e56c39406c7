"""Queries against the local git checkout."""

from __future__ import annotations

import re
import subprocess
from urllib.parse import unquote

from loguru import logger

from .exceptions import GitError

# Matches:  git@<host>:<namespace/project>(.git)
_SCP_RE = re.compile(r"^(?:[^@/]+@)?([^:/]+):(?!//)(.+?)(?:\.git)?/?$")
# Matches:  <scheme>://[user@]<host>[:port]/<namespace/project>(.git)
_URL_RE = re.compile(r"^[a-z+]+://(?:[^@/]+@)?([^:/]+)(:\d+)?/(.+?)(?:\.git)?/?$")


def _git(*args: str) -> str:
    try:
        proc = subprocess.run(
            ["git", *args],
            capture_output=True,
            text=True,
            check=True,
        )
    except FileNotFoundError as e:
        raise GitError("git executable not found") from e
    except subprocess.CalledProcessError as e:
        msg = e.stderr.strip() or f"git {' '.join(args)} exited with {e.returncode}"
        raise GitError(msg) from e
    return proc.stdout.strip()


def current_branch() -> str:
    branch = _git("rev-parse", "--abbrev-ref", "HEAD")
    if branch == "HEAD":
        raise GitError("HEAD is detached; pass a branch name explicitly")
    return branch


def branch_remote(branch: str, default: str = "origin") -> str:
    """Remote that *branch* tracks, or *default* when it tracks none."""
    try:
        remote = _git("config", "--get", f"branch.{branch}.remote")
    except GitError:
        remote = ""
    logger.debug("branch {} tracks remote {!r}", branch, remote or default)
    return remote or default


def remote_url(remote: str) -> str:
    return _git("remote", "get-url", remote)


def _split_remote(url: str) -> tuple[str, str, str]:
    """Split a remote URL into (host, port, project path); port is "" when absent."""
    m = _URL_RE.match(url)
    if m:
        return m.group(1), m.group(2) or "", unquote(m.group(3))
    m = _SCP_RE.match(url)
    if not m:
        msg = f"Cannot parse git remote URL: {url}"
        raise GitError(msg)
    return m.group(1), "", unquote(m.group(2))


def path_with_namespace(url: str) -> str:
    """Extract ``namespace/project`` from an SSH, SCP-style or HTTP(S) remote URL."""
    return _split_remote(url)[2]


def host_url(url: str) -> str:
    """The ``https://host`` base of the GitLab instance serving a remote."""
    host, port, _ = _split_remote(url)
    if url.startswith(("http://", "https://")):
        scheme = url.split("://", 1)[0]
        return f"{scheme}://{host}{port}"
    # SSH ports are dropped; the API is assumed on the default HTTPS port.
    return f"https://{host}"
