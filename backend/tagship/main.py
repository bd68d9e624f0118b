"""
TagShip — FastAPI Backend

Endpoints:
  POST /v1/releases  — find-or-create a release and upload its assets
  GET  /health       — Health check
"""

import time
import uuid

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field

from tagship.core.config import settings, validate_config
from tagship.errors import (
    FallbackExhaustedError,
    TagShipError,
    TerminalRemoteError,
    TransientRemoteError,
)
from tagship.github.endpoint import ClientRegistry
from tagship.models.release import ReleaseRequest, RepoCoordinates
from tagship.pipeline.orchestrator import ReleaseOrchestrator
from tagship.remote.retry import RetryPolicy
from tagship.utils.logging import logger, set_verbose

VERSION = "1.0.0"

_REMOTE_ERRORS = (FallbackExhaustedError, TerminalRemoteError, TransientRemoteError)

app = FastAPI(
    title="TagShip API",
    description="Publish GitHub releases with a changelog body and binary assets.",
    version=VERSION,
)


@app.on_event("startup")
async def _startup_banner():
    set_verbose(settings.verbose)
    logger.info("")
    logger.info("╔══════════════════════════════════════════════════╗")
    logger.info("║              TagShip  ·  API Server              ║")
    logger.info("╠══════════════════════════════════════════════════╣")
    logger.info("║  POST /v1/releases  → Publish a release          ║")
    logger.info("║  GET  /health       → Health check               ║")
    logger.info("╠══════════════════════════════════════════════════╣")
    logger.info("║  GitHub host : %-33s ║", settings.github.host)
    logger.info("║  Token       : %-33s ║", "✓ loaded" if settings.github.token else "✗ missing")
    logger.info("╚══════════════════════════════════════════════════╝")
    logger.info("")


# ──────────────────────────────────────────────────────────
# Request models
# ──────────────────────────────────────────────────────────

class PublishRequest(BaseModel):
    repo: str = Field(..., description="owner/project or a git remote URL")
    host: str | None = Field(
        default=None,
        description="GitHub host for owner/project repos (defaults to TAGSHIP_GITHUB_HOST)",
    )
    release: ReleaseRequest
    assets: list[str] = Field(
        default_factory=list,
        description="Glob patterns of files to attach, relative to the server's working directory",
    )
    dry_run: bool = Field(default=False, description="Log what would happen, call nothing")


# ──────────────────────────────────────────────────────────
# Endpoints
# ──────────────────────────────────────────────────────────

@app.get("/health")
async def health():
    return {"status": "ok", "service": "tagship-api", "version": VERSION}


@app.post("/v1/releases")
async def publish(req: PublishRequest):
    """
    Find the release for the version's tag (or create it) and upload the
    matched assets. Returns the PublishResult.
    """
    request_id = uuid.uuid4().hex[:12]
    logger.info("[%s] POST /v1/releases — %s %s", request_id, req.repo, req.release.version)
    start = time.perf_counter()

    try:
        dry_run = req.dry_run or settings.dry_run
        validate_config(settings, dry_run=dry_run)
        repo = RepoCoordinates.parse(req.repo, host=req.host or settings.github.host)
        orchestrator = ReleaseOrchestrator(
            repo=repo,
            token=settings.github.token,
            request=req.release,
            assets=req.assets or settings.release.assets,
            dry_run=dry_run,
            policy=RetryPolicy(
                retries=settings.retry.retries,
                min_delay=settings.retry.min_delay,
            ),
            registry=ClientRegistry(timeout=settings.github.timeout),
        )
        result = await orchestrator.run()

    except _REMOTE_ERRORS as exc:
        logger.warning("[%s] Remote error: %s", request_id, exc.code)
        raise HTTPException(status_code=502, detail=exc.to_dict())
    except TagShipError as exc:
        logger.warning("[%s] TagShip error: %s", request_id, exc.code)
        raise HTTPException(status_code=422, detail=exc.to_dict())
    except Exception as exc:
        logger.exception("[%s] Publish failed", request_id)
        raise HTTPException(status_code=500, detail=str(exc))

    logger.info(
        "[%s] Complete — %d asset(s) in %.0f ms",
        request_id, len(result.assets), (time.perf_counter() - start) * 1000,
    )
    return result.model_dump()
