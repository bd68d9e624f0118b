"""
TagShip — Publish job result contract.

Every publish run returns a PublishResult with its timings, warnings,
the resolved release and the uploaded assets.
"""

from __future__ import annotations

import enum

from pydantic import BaseModel, Field

from tagship.models.release import AssetRecord, ReleaseRecord


class PublishState(str, enum.Enum):
    RECEIVED = "RECEIVED"
    RELEASE_RESOLVED = "RELEASE_RESOLVED"
    ASSETS_PUBLISHED = "ASSETS_PUBLISHED"
    DELIVERED = "DELIVERED"
    FAILED = "FAILED"


class StepTiming(BaseModel):
    step: str
    duration_ms: int
    status: str = "ok"  # ok | skipped | failed
    detail: str = ""


class PublishResult(BaseModel):
    """Complete output contract for a publish run."""

    job_id: str
    tag_name: str
    dry_run: bool = False
    release: ReleaseRecord | None = None
    assets: list[AssetRecord] = Field(default_factory=list)
    timings: list[StepTiming] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
