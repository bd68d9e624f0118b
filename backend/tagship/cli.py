"""
TagShip — Command line entry point.

  tagship publish 1.2.0 --repo acme/widget --asset "dist/*.tar.gz" --changelog-file CHANGES.md
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import NoReturn, Optional

import typer

from tagship.core.config import settings, validate_config
from tagship.errors import ConfigError, TagShipError
from tagship.github.endpoint import ClientRegistry
from tagship.models.release import ReleaseRequest, RepoCoordinates
from tagship.pipeline.orchestrator import ReleaseOrchestrator
from tagship.remote.retry import RetryPolicy
from tagship.utils.logging import set_verbose

EXIT_ERROR = 1
EXIT_CONFIG = 2

app = typer.Typer(add_completion=False, no_args_is_help=True)


def _exit(err: TagShipError, *, code: int) -> NoReturn:
    typer.echo(f"error: {err.message}", err=True)
    if err.suggestion:
        typer.echo(f"hint: {err.suggestion}", err=True)
    raise typer.Exit(code=code)


@app.callback()
def _main() -> None:
    """Publish GitHub releases."""


@app.command()
def publish(
    version: str = typer.Argument(..., help="Version being released, e.g. 1.2.0"),
    repo: str = typer.Option(..., "--repo", help="owner/project or a git remote URL"),
    host: Optional[str] = typer.Option(None, "--host", help="GitHub host for owner/project"),
    tag_name: Optional[str] = typer.Option(None, "--tag-name", help="Tag template, %s = version"),
    release_name: Optional[str] = typer.Option(
        None, "--release-name", help="Release name template, %s = version"
    ),
    changelog_file: Optional[Path] = typer.Option(
        None, "--changelog-file", exists=True, dir_okay=False, help="Release body"
    ),
    prerelease: Optional[bool] = typer.Option(None, "--prerelease/--no-prerelease"),
    draft: Optional[bool] = typer.Option(None, "--draft/--no-draft"),
    asset: Optional[list[str]] = typer.Option(None, "--asset", help="Glob pattern, repeatable"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Log what would happen, call nothing"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Find or create the release for VERSION and upload its assets."""
    set_verbose(verbose or settings.verbose)
    dry_run = dry_run or settings.dry_run
    defaults = settings.release

    try:
        validate_config(settings, dry_run=dry_run)
    except ConfigError as exc:
        _exit(exc, code=EXIT_CONFIG)

    try:
        coords = RepoCoordinates.parse(repo, host=host or settings.github.host)
        request = ReleaseRequest(
            version=version,
            tag_name=tag_name or defaults.tag_name,
            release_name=release_name or defaults.release_name,
            changelog=changelog_file.read_text(encoding="utf-8") if changelog_file else "",
            prerelease=defaults.prerelease if prerelease is None else prerelease,
            draft=defaults.draft if draft is None else draft,
        )
        orchestrator = ReleaseOrchestrator(
            repo=coords,
            token=settings.github.token,
            request=request,
            assets=asset or defaults.assets,
            dry_run=dry_run,
            policy=RetryPolicy(
                retries=settings.retry.retries,
                min_delay=settings.retry.min_delay,
            ),
            registry=ClientRegistry(timeout=settings.github.timeout),
        )
        result = asyncio.run(orchestrator.run())
    except TagShipError as exc:
        _exit(exc, code=EXIT_ERROR)

    if result.release is not None:
        typer.echo(result.release.html_url or f"release {result.release.id}")
    for a in result.assets:
        typer.echo(a.browser_download_url or a.name)


if __name__ == "__main__":
    app()
