"""Configuration management for classroom-teams."""

from pathlib import Path

import yaml  # type: ignore[import-untyped]
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .github_client.client import DEFAULT_API_URL


class GitHubConfig(BaseSettings):
    """GitHub API configuration."""

    model_config = SettingsConfigDict(
        env_prefix="GITHUB_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    token: str | None = Field(default=None, description="GitHub API access token")
    org: str | None = Field(default=None, description="GitHub organization name")
    api_url: str = Field(default=DEFAULT_API_URL, description="GitHub REST API base URL")
    timeout: float = Field(default=30.0, description="Request timeout in seconds")


class AppConfig(BaseSettings):
    """Main application configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    github: GitHubConfig = Field(default_factory=GitHubConfig)

    @classmethod
    def from_yaml(cls, path: Path) -> "AppConfig":
        """Load configuration from a YAML file."""
        if not path.exists():
            return cls()

        with open(path) as f:
            data = yaml.safe_load(f) or {}

        # Values missing from the file still come from the environment or .env
        github = GitHubConfig(**(data.pop("github", None) or {}))
        return cls(github=github, **data)


def load_config(config_path: Path | None = None) -> AppConfig:
    """Load application configuration from environment and optional YAML file."""
    if config_path:
        return AppConfig.from_yaml(config_path)
    return AppConfig()
