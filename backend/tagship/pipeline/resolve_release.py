"""
TagShip — Release resolution step.

Looks up the release for the version's tag and creates it when the lookup
fails. Both calls go through the retry executor.

Any lookup failure triggers the create fallback, including a lookup that
only ran out of retries on a transient error. If the release does exist in
that case, create answers 422 (already_exists) and the run fails rather
than publishing a duplicate.
"""

from __future__ import annotations

from tagship.errors import FallbackExhaustedError, TagShipError
from tagship.github.endpoint import ClientRegistry
from tagship.models.release import ReleaseRecord, ReleaseRequest, RepoCoordinates
from tagship.remote.retry import RetryPolicy, call_with_retry
from tagship.utils.logging import dry_run_notice, log_exec, logger, step_timer


async def resolve_or_create_release(
    repo: RepoCoordinates,
    registry: ClientRegistry,
    token: str,
    request: ReleaseRequest,
    dry_run: bool = False,
    policy: RetryPolicy | None = None,
) -> ReleaseRecord | None:
    """
    Return the release for ``request``'s tag, creating it if needed.

    Returns None in dry-run mode. Raises FallbackExhaustedError carrying the
    create call's message when both lookup and create fail.
    """
    log_exec("GitHub releases#getReleaseByTag")
    log_exec("GitHub releases#createRelease")

    if dry_run:
        dry_run_notice()
        return None

    tag_name = request.resolved_tag()
    client = registry.get(repo.host, token)

    with step_timer(f"Resolve release {repo.slug}@{tag_name}"):
        try:
            release = await call_with_retry(
                "releases#getReleaseByTag",
                lambda: client.get_release_by_tag(repo.owner, repo.project, tag_name),
                policy,
            )
            logger.info("  Found release %s (id %s)", release.tag_name, release.id)
            return release
        except TagShipError as exc:
            logger.debug("  Release lookup for %s failed, creating it: %s", tag_name, exc.message)

        try:
            release = await call_with_retry(
                "releases#createRelease",
                lambda: client.create_release(
                    repo.owner,
                    repo.project,
                    tag_name=tag_name,
                    name=request.resolved_name(),
                    body=request.changelog,
                    prerelease=request.prerelease,
                    draft=request.draft,
                ),
                policy,
            )
        except TagShipError as exc:
            raise FallbackExhaustedError(tag_name, exc.message) from exc

        logger.info("  Created release %s (id %s)", release.tag_name, release.id)
        return release
