"""
TagShip — Release Orchestrator.

Runs a publish as a small state machine:

  RECEIVED → RELEASE_RESOLVED → ASSETS_PUBLISHED → DELIVERED
                     ↘ FAILED ↙

Release resolution always finishes before any asset upload starts, and no
upload is attempted without a release id. The orchestrator owns the client
registry for the run and closes it when the run ends.
"""

from __future__ import annotations

import time
import uuid
from pathlib import Path

from tagship.errors import TagShipError
from tagship.github.endpoint import ClientRegistry
from tagship.models.job import PublishResult, PublishState, StepTiming
from tagship.models.release import AssetRecord, ReleaseRecord, ReleaseRequest, RepoCoordinates
from tagship.pipeline.publish_assets import publish_assets
from tagship.pipeline.resolve_release import resolve_or_create_release
from tagship.remote.retry import RetryPolicy
from tagship.utils.logging import logger


class ReleaseOrchestrator:
    """
    Sequences release resolution and asset publishing for one version.

    Tracks every step's timing and status and produces a PublishResult.
    """

    def __init__(
        self,
        repo: RepoCoordinates,
        token: str,
        request: ReleaseRequest,
        assets: str | list[str] | None = None,
        dry_run: bool = False,
        policy: RetryPolicy | None = None,
        registry: ClientRegistry | None = None,
        cwd: str | Path | None = None,
    ):
        self.job_id = uuid.uuid4().hex[:12]
        self.repo = repo
        self.token = token
        self.request = request
        self.assets = assets
        self.dry_run = dry_run
        self.policy = policy or RetryPolicy()
        self.registry = registry if registry is not None else ClientRegistry()
        self.cwd = cwd
        self.state = PublishState.RECEIVED
        self.timings: list[StepTiming] = []
        self.warnings: list[str] = []

    def _record_step(self, name: str, start: float, status: str = "ok", detail: str = ""):
        ms = int((time.perf_counter() - start) * 1000)
        self.timings.append(StepTiming(step=name, duration_ms=ms, status=status, detail=detail))
        symbol = "✓" if status == "ok" else ("⊘" if status == "skipped" else "✗")
        logger.info("  %s %s — %dms %s", symbol, name, ms, detail)

    async def run(self) -> PublishResult:
        """Resolve (or create) the release, then upload its assets."""
        tag_name = self.request.resolved_tag()
        logger.info("=" * 60)
        logger.info(
            "[%s] Publishing %s@%s%s",
            self.job_id, self.repo.slug, tag_name, " (dry run)" if self.dry_run else "",
        )
        logger.info("=" * 60)
        start = time.perf_counter()

        try:
            release = await self._step_resolve_release()
            assets = await self._step_publish_assets(release)
            self.state = PublishState.DELIVERED
        except TagShipError as exc:
            self.state = PublishState.FAILED
            logger.error("[%s] Publish failed: %s", self.job_id, exc.message)
            raise
        except Exception:
            self.state = PublishState.FAILED
            raise
        finally:
            await self.registry.aclose()

        logger.info(
            "[%s] Publish complete — %d asset(s), %dms",
            self.job_id, len(assets), int((time.perf_counter() - start) * 1000),
        )
        return PublishResult(
            job_id=self.job_id,
            tag_name=tag_name,
            dry_run=self.dry_run,
            release=release,
            assets=assets,
            timings=self.timings,
            warnings=self.warnings,
        )

    async def _step_resolve_release(self) -> ReleaseRecord | None:
        t = time.perf_counter()
        try:
            release = await resolve_or_create_release(
                self.repo,
                self.registry,
                self.token,
                self.request,
                dry_run=self.dry_run,
                policy=self.policy,
            )
        except TagShipError as exc:
            self._record_step("resolve_release", t, "failed", exc.message)
            raise

        if release is None:
            self._record_step("resolve_release", t, "skipped", "dry run")
        else:
            self._record_step("resolve_release", t, detail=f"id={release.id}")
        self.state = PublishState.RELEASE_RESOLVED
        return release

    async def _step_publish_assets(self, release: ReleaseRecord | None) -> list[AssetRecord]:
        t = time.perf_counter()
        if release is None and not self.dry_run:
            # resolve_or_create_release only returns None in dry-run mode
            raise RuntimeError("no release id to upload assets to")

        try:
            uploaded = await publish_assets(
                release.id if release else None,
                self.repo,
                self.registry,
                self.token,
                self.assets,
                dry_run=self.dry_run,
                policy=self.policy,
                cwd=self.cwd,
                warnings=self.warnings,
            )
        except TagShipError as exc:
            self._record_step("publish_assets", t, "failed", exc.message)
            raise

        if self.dry_run or not self.assets:
            self._record_step("publish_assets", t, "skipped", "dry run" if self.dry_run else "no assets")
        else:
            self._record_step("publish_assets", t, detail=f"{len(uploaded)} uploaded")
        self.state = PublishState.ASSETS_PUBLISHED
        return uploaded


async def publish_release(
    repo: RepoCoordinates,
    token: str,
    request: ReleaseRequest,
    assets: str | list[str] | None = None,
    dry_run: bool = False,
    policy: RetryPolicy | None = None,
) -> list[AssetRecord]:
    """Run a full publish and return the uploaded assets."""
    orchestrator = ReleaseOrchestrator(
        repo=repo,
        token=token,
        request=request,
        assets=assets,
        dry_run=dry_run,
        policy=policy,
    )
    result = await orchestrator.run()
    return result.assets
