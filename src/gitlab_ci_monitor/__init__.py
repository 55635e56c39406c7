"""Command-line monitor for GitLab CI pipelines."""

import asyncio
import os

import click
from dotenv import load_dotenv

from .config import GitLabConfig, StatusOptions
from .exceptions import GitLabAuthError, GitLabError, GitLabNotFoundError
from .log import configure_logging

ALIASES = {"run": "status", "logs": "job"}


class AliasedGroup(click.Group):
    def get_command(self, ctx: click.Context, cmd_name: str) -> click.Command | None:
        return super().get_command(ctx, ALIASES.get(cmd_name, cmd_name))

    def resolve_command(
        self, ctx: click.Context, args: list[str]
    ) -> tuple[str | None, click.Command | None, list[str]]:
        _, cmd, args = super().resolve_command(ctx, args)
        return (cmd.name if cmd else None), cmd, args


def _describe(error: Exception) -> str:
    msg = str(error)
    if isinstance(error, GitLabNotFoundError):
        msg += "\nHint: verify the project path and that the token can see it."
    elif isinstance(error, GitLabAuthError):
        msg += "\nHint: check GITLAB_TOKEN permissions. Token needs 'read_api' scope."
    return msg


def _load_config(remote_url: str) -> GitLabConfig:
    from .git import host_url

    config = GitLabConfig.from_env()
    if not config.url:
        config.url = host_url(remote_url)
    return config


def _locate(branch: str | None, remote: str | None) -> tuple[str, str, str]:
    """Return (branch, remote URL, project path) for the current checkout."""
    from . import git

    branch = branch or git.current_branch()
    remote = remote or git.branch_remote(branch)
    url = git.remote_url(remote)
    return branch, url, git.path_with_namespace(url)


@click.group(cls=AliasedGroup)
@click.option("--gitlab-url", envvar="GITLAB_URL", help="GitLab instance URL")
@click.option("--gitlab-token", envvar="GITLAB_TOKEN", help="GitLab personal access token")
@click.option("-v", "--verbose", is_flag=True, help="Log API traffic to stderr")
def main(gitlab_url: str | None, gitlab_token: str | None, verbose: bool) -> None:
    """Inspect GitLab CI pipelines from the command line."""
    load_dotenv()
    configure_logging(verbose)

    if gitlab_url:
        os.environ["GITLAB_URL"] = gitlab_url
    if gitlab_token:
        os.environ["GITLAB_TOKEN"] = gitlab_token


@main.command("status")
@click.argument("branch", required=False)
@click.option("-R", "--remote", help="Git remote to take the project from")
@click.option(
    "-w",
    "--wait",
    is_flag=True,
    help="Continuously print the status and wait to exit until the pipeline finishes. "
    "Exit code indicates pipeline status",
)
@click.option("--no-skipped", is_flag=True, help="Ignore skipped jobs - do not print them")
@click.option("-c", "--color", is_flag=True, help="Use color for success and failure")
@click.option(
    "-f", "--failures", "--failed", "only_failures", is_flag=True, help="Only print failures"
)
@click.option(
    "-r",
    "--results-only",
    "no_created",
    is_flag=True,
    help="Only show completed and running jobs. Does not report queued jobs",
)
@click.option(
    "-s",
    "--summary",
    "summary_only",
    is_flag=True,
    help="Do not show individual jobs, just the pipeline summary",
)
@click.option(
    "--interval",
    type=click.FloatRange(min=0),
    help="Seconds between polls with --wait (default: GITLAB_POLL_INTERVAL or 5)",
)
@click.pass_context
def status(
    ctx: click.Context,
    branch: str | None,
    remote: str | None,
    wait: bool,
    no_skipped: bool,
    color: bool,
    only_failures: bool,
    no_created: bool,
    summary_only: bool,
    interval: float | None,
) -> None:
    """Textual representation of a CI pipeline.

    BRANCH defaults to the current branch; "!<iid>" or a number selects a
    merge request instead.
    """
    from .ci.monitor import PipelineMonitor
    from .ci.resolve import resolve_target
    from .client import GitLabClient

    async def run(config: GitLabConfig, project_path: str, ref: str, options: StatusOptions) -> int:
        client = GitLabClient(config)
        try:
            target = await resolve_target(client, project_path, ref)
            return await PipelineMonitor(client, target.project_id, options).run(
                target.pipeline_id
            )
        finally:
            await client.close()

    try:
        ref, url, project_path = _locate(branch, remote)
        config = _load_config(url)
        options = StatusOptions(
            wait=wait,
            no_skipped=no_skipped,
            only_failures=only_failures,
            no_created=no_created,
            summary_only=summary_only,
            color=color,
            poll_interval=config.poll_interval if interval is None else interval,
        )
        code = asyncio.run(run(config, project_path, ref, options))
    except (GitLabError, ValueError) as e:
        raise click.ClickException(_describe(e)) from e
    ctx.exit(code)


@main.command("job")
@click.argument("job_ref", metavar="[BRANCH:]JOB_ID")
@click.option("-R", "--remote", help="Git remote to take the project from")
def job(job_ref: str, remote: str | None) -> None:
    """Re-run a CI job: play it if manual, retry it otherwise."""
    from .ci.jobs import play_or_retry
    from .client import GitLabClient

    branch, _, job_id = job_ref.rpartition(":")
    try:
        jid = int(job_id)
    except ValueError:
        raise click.BadParameter(f"{job_id!r} is not a job id", param_hint="JOB_ID") from None

    async def run(config: GitLabConfig, project_path: str) -> None:
        client = GitLabClient(config)
        try:
            started = await play_or_retry(client, project_path, jid)
        finally:
            await client.close()
        click.echo(f"Started job {started.id} ({started.status})")

    try:
        _, url, project_path = _locate(branch or None, remote)
        asyncio.run(run(_load_config(url), project_path))
    except (GitLabError, ValueError) as e:
        raise click.ClickException(_describe(e)) from e


if __name__ == "__main__":
    main()
