"""Jira site configuration loading."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from jirafield.jira import JiraSite

CONFIG_FILENAME = "jira.yaml"
DEFAULT_TIMEOUT = 30.0


class ConfigError(Exception):
    """Raised when configuration is invalid or missing."""


@dataclass(frozen=True)
class SiteConfig:
    """Connection settings for a Jira site.

    Credentials are passed through to the site as given.
    """

    url: str
    username: str | None = None
    token: str | None = None
    timeout: float = DEFAULT_TIMEOUT

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> SiteConfig:
        """Create config from a mapping.

        Args:
            data: Configuration mapping (from YAML).

        Returns:
            Parsed configuration object.

        Raises:
            ConfigError: If the url is missing or the timeout is invalid.
        """
        url = data.get("url")
        if not url:
            raise ConfigError("Missing required field: url")

        try:
            timeout = float(data.get("timeout", DEFAULT_TIMEOUT))
        except (TypeError, ValueError) as e:
            raise ConfigError(f"Invalid timeout: {data.get('timeout')!r}") from e

        token = data.get("token")
        token_env = data.get("token_env")
        if token is None and token_env:
            token = os.environ.get(token_env)

        return cls(
            url=str(url),
            username=data.get("username"),
            token=token,
            timeout=timeout,
        )

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> SiteConfig:
        """Create config from JIRA_URL, JIRA_USER, JIRA_API_TOKEN and JIRA_TIMEOUT.

        Raises:
            ConfigError: If JIRA_URL is not set.
        """
        env = os.environ if environ is None else environ
        if not env.get("JIRA_URL"):
            raise ConfigError("JIRA_URL is not set and no configuration file was found")
        return cls.from_dict(
            {
                "url": env["JIRA_URL"],
                "username": env.get("JIRA_USER") or None,
                "token": env.get("JIRA_API_TOKEN") or None,
                "timeout": env.get("JIRA_TIMEOUT", DEFAULT_TIMEOUT),
            }
        )

    def to_site(self) -> JiraSite:
        return JiraSite(
            self.url,
            username=self.username,
            token=self.token,
            timeout=self.timeout,
        )


def load_config(config_path: Path | str) -> SiteConfig:
    """Load site configuration from a YAML file.

    Args:
        config_path: Path to jira.yaml file.

    Returns:
        Parsed configuration object.

    Raises:
        ConfigError: If file doesn't exist or is invalid.
    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise ConfigError(f"Configuration file not found: {config_path}")

    try:
        with open(config_path) as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {config_path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Configuration must be a YAML mapping, got {type(data).__name__}")

    return SiteConfig.from_dict(data)


def find_config(start_path: Path | str | None = None) -> Path | None:
    """Find jira.yaml by walking up the directory tree.

    Args:
        start_path: Starting directory. Defaults to current directory.

    Returns:
        Path to the config file, or None if there is none.
    """
    current = (Path.cwd() if start_path is None else Path(start_path)).resolve()

    for directory in (current, *current.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate

    return None


def resolve_site_config(config_path: Path | str | None = None) -> SiteConfig:
    """Load the explicit config file, else a discovered jira.yaml, else the environment."""
    if config_path is None:
        config_path = find_config()
    if config_path is not None:
        return load_config(config_path)
    return SiteConfig.from_env()
