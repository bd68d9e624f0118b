"""
TagShip — Configuration
Loads .env automatically, then reads all settings from environment variables.
"""

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from tagship.errors import ConfigError

_env_path = Path(__file__).resolve().parent.parent.parent / ".env"
load_dotenv(_env_path)


def _flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class GitHubConfig:
    """GitHub endpoint and credentials."""
    host: str
    token: str
    timeout: float


@dataclass(frozen=True)
class RetryConfig:
    retries: int
    min_delay: float


@dataclass(frozen=True)
class ReleaseDefaults:
    """Defaults for anything the caller does not pass explicitly."""
    tag_name: str
    release_name: str
    prerelease: bool
    draft: bool
    assets: list[str]


@dataclass(frozen=True)
class AppConfig:
    """Top-level application configuration."""
    github: GitHubConfig
    retry: RetryConfig
    release: ReleaseDefaults
    dry_run: bool
    verbose: bool


def load_config() -> AppConfig:
    assets = os.getenv("TAGSHIP_ASSETS", "")
    return AppConfig(
        github=GitHubConfig(
            host=os.getenv("TAGSHIP_GITHUB_HOST", "github.com"),
            token=os.getenv("GITHUB_TOKEN", ""),
            timeout=float(os.getenv("TAGSHIP_TIMEOUT", "10.0")),
        ),
        retry=RetryConfig(
            retries=int(os.getenv("TAGSHIP_RETRIES", "2")),
            min_delay=float(os.getenv("TAGSHIP_RETRY_MIN_DELAY", "1.0")),
        ),
        release=ReleaseDefaults(
            tag_name=os.getenv("TAGSHIP_TAG_NAME", "%s"),
            release_name=os.getenv("TAGSHIP_RELEASE_NAME", "Release %s"),
            prerelease=_flag("TAGSHIP_PRERELEASE"),
            draft=_flag("TAGSHIP_DRAFT"),
            assets=[a.strip() for a in assets.split(",") if a.strip()],
        ),
        dry_run=_flag("TAGSHIP_DRY_RUN"),
        verbose=_flag("TAGSHIP_VERBOSE"),
    )


def validate_config(cfg: AppConfig, dry_run: bool | None = None) -> None:
    """Fail fast if the GitHub token is missing. A dry run needs no token."""
    if dry_run is None:
        dry_run = cfg.dry_run
    missing: list[str] = []
    if not cfg.github.token and not dry_run:
        missing.append("GITHUB_TOKEN")
    if not cfg.github.host:
        missing.append("TAGSHIP_GITHUB_HOST")
    if missing:
        raise ConfigError(missing)


settings = load_config()
