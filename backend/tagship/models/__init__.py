"""TagShip data models — typed contracts for the publish pipeline."""

from tagship.models.release import (
    RepoCoordinates,
    ReleaseRequest,
    ReleaseRecord,
    AssetUploadRequest,
    AssetRecord,
)
from tagship.models.outcome import (
    CallState,
    ClassifiedError,
    Succeeded,
    Failed,
    CallOutcome,
)
from tagship.models.job import (
    PublishState,
    StepTiming,
    PublishResult,
)

__all__ = [
    "RepoCoordinates",
    "ReleaseRequest",
    "ReleaseRecord",
    "AssetUploadRequest",
    "AssetRecord",
    "CallState",
    "ClassifiedError",
    "Succeeded",
    "Failed",
    "CallOutcome",
    "PublishState",
    "StepTiming",
    "PublishResult",
]
