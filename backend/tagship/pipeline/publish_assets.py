"""
TagShip — Asset publishing step.

Expands the configured patterns and uploads every match to the release,
all uploads in flight at once. The step fails if any upload fails for good,
after waiting for the uploads already in flight to finish.
"""

from __future__ import annotations

import asyncio
import os
from pathlib import Path

from tagship.github.endpoint import ClientRegistry
from tagship.models.release import AssetRecord, AssetUploadRequest, RepoCoordinates
from tagship.pipeline.discover import discover_files, normalize_patterns
from tagship.remote.retry import RetryPolicy, call_with_retry
from tagship.utils.logging import dry_run_notice, log_exec, logger, step_timer


async def publish_assets(
    release_id: int | None,
    repo: RepoCoordinates,
    registry: ClientRegistry,
    token: str,
    assets: str | list[str] | None,
    dry_run: bool = False,
    policy: RetryPolicy | None = None,
    cwd: str | Path | None = None,
    warnings: list[str] | None = None,
) -> list[AssetRecord]:
    """
    Upload the files matched by ``assets`` to release ``release_id``.

    No patterns → no-op. No matches → one warning (also appended to
    ``warnings``) and an empty result.
    """
    patterns = normalize_patterns(assets)
    if not patterns:
        return []

    log_exec("GitHub releases#uploadAsset")

    if dry_run:
        dry_run_notice()
        return []

    workdir = Path(cwd) if cwd is not None else Path(os.getcwd())
    files = discover_files(patterns, workdir)
    if not files:
        msg = (
            f"GitHub releases#uploadAssets: assets not found "
            f'(glob "{",".join(patterns)}" relative to {workdir})'
        )
        logger.warning(msg)
        if warnings is not None:
            warnings.append(msg)
        return []

    client = registry.get(repo.host, token)

    async def _upload(req: AssetUploadRequest) -> AssetRecord:
        return await call_with_retry(
            f"releases#uploadAsset {req.name}",
            lambda: client.upload_asset(
                repo.owner, repo.project, req.release_id, req.file_path, req.name
            ),
            policy,
        )

    with step_timer(f"Upload {len(files)} asset(s)"):
        requests = [AssetUploadRequest.for_file(release_id, path) for path in files]
        tasks = [asyncio.create_task(_upload(req)) for req in requests]
        done, pending = await asyncio.wait(tasks, return_when=asyncio.FIRST_EXCEPTION)
        failed = [t for t in tasks if t in done and t.exception() is not None]
        if failed:
            # siblings keep running; the client must outlive them
            if pending:
                await asyncio.wait(pending)
            for t in tasks:
                if t is not failed[0] and not t.cancelled():
                    t.exception()
            raise failed[0].exception()
        uploaded = [t.result() for t in tasks]

    for asset in uploaded:
        logger.info("  Uploaded %s (%d bytes)", asset.name, asset.size)
    return list(uploaded)
