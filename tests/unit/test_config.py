"""Tests for configuration."""

from __future__ import annotations

import os
from unittest.mock import patch

import pytest

from gitlab_ci_monitor.config import GitLabConfig, StatusOptions


def test_config_from_env():
    env = {"GITLAB_URL": "https://gitlab.example.com", "GITLAB_TOKEN": "glpat-abc123"}
    with patch.dict(os.environ, env, clear=True):
        config = GitLabConfig.from_env()
    assert config.url == "https://gitlab.example.com"
    assert config.token == "glpat-abc123"
    assert config.timeout == 30
    assert config.ssl_verify is True
    assert config.poll_interval == 5.0


def test_config_from_env_with_pat():
    env = {"GITLAB_URL": "https://gitlab.example.com", "GITLAB_PAT": "glpat-xyz"}
    with patch.dict(os.environ, env, clear=True):
        config = GitLabConfig.from_env()
    assert config.token == "glpat-xyz"


def test_config_token_priority():
    """GITLAB_TOKEN takes precedence over all other aliases."""
    env = {
        "GITLAB_URL": "https://gitlab.example.com",
        "GITLAB_TOKEN": "winner",
        "GITLAB_PAT": "loser1",
        "GITLAB_PERSONAL_ACCESS_TOKEN": "loser2",
        "GITLAB_API_TOKEN": "loser3",
    }
    with patch.dict(os.environ, env, clear=True):
        config = GitLabConfig.from_env()
    assert config.token == "winner"


def test_config_url_strips_trailing_slash():
    env = {"GITLAB_URL": "https://gitlab.example.com/", "GITLAB_TOKEN": "x"}
    with patch.dict(os.environ, env, clear=True):
        config = GitLabConfig.from_env()
    assert config.url == "https://gitlab.example.com"


def test_config_poll_interval_and_ssl():
    env = {
        "GITLAB_URL": "https://gitlab.example.com",
        "GITLAB_TOKEN": "x",
        "GITLAB_POLL_INTERVAL": "0.5",
        "GITLAB_SSL_VERIFY": "no",
    }
    with patch.dict(os.environ, env, clear=True):
        config = GitLabConfig.from_env()
    assert config.poll_interval == 0.5
    assert config.ssl_verify is False


def test_config_api_url():
    config = GitLabConfig(url="https://gitlab.example.com", token="x")
    assert config.api_url == "https://gitlab.example.com/api/v4"


def test_config_validate_missing_url():
    config = GitLabConfig(url="", token="x")
    with pytest.raises(ValueError, match="GITLAB_URL"):
        config.validate()


def test_config_validate_missing_token():
    config = GitLabConfig(url="https://gitlab.example.com", token="")
    with pytest.raises(ValueError, match="GITLAB_TOKEN"):
        config.validate()


def test_config_validate_negative_interval():
    config = GitLabConfig(url="https://gitlab.example.com", token="x", poll_interval=-1)
    with pytest.raises(ValueError, match="POLL_INTERVAL"):
        config.validate()


def test_status_options_defaults():
    options = StatusOptions()
    assert not any(
        (options.wait, options.no_skipped, options.only_failures, options.no_created)
    )
    assert options.poll_interval == 0.0
