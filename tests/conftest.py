"""Shared test configuration and fixtures for the TagShip test suite."""

import json
import sys
import tempfile
from pathlib import Path
from unittest.mock import AsyncMock

import pytest

# Add backend to Python path so imports work
backend_dir = str(Path(__file__).parent.parent / "backend")
if backend_dir not in sys.path:
    sys.path.insert(0, backend_dir)

from tagship.errors import RemoteCallError  # noqa: E402
from tagship.models.release import (  # noqa: E402
    AssetRecord,
    ReleaseRecord,
    ReleaseRequest,
    RepoCoordinates,
)
from tagship.remote.retry import RetryPolicy  # noqa: E402


def remote_error(code: int | None, message: str = "boom", *codes: str) -> RemoteCallError:
    """A RemoteCallError with a GitHub-style JSON body."""
    body = json.dumps({"message": message, "errors": [{"code": c} for c in codes]})
    return RemoteCallError(code, str(code), body)


class FakeRegistry:
    """Stands in for ClientRegistry; hands out one AsyncMock client."""

    def __init__(self):
        self.client = AsyncMock()
        self.requested: list[tuple[str, str]] = []
        self.closed = False

    def get(self, host: str, token: str):
        self.requested.append((host, token))
        return self.client

    async def aclose(self) -> None:
        self.closed = True


@pytest.fixture
def fast_policy():
    return RetryPolicy(min_delay=0.0, randomize=False)


@pytest.fixture
def fake_registry():
    return FakeRegistry()


@pytest.fixture
def repo():
    return RepoCoordinates(host="github.com", owner="acme", project="widget")


@pytest.fixture
def release_request():
    return ReleaseRequest(
        version="1.2.0",
        tag_name="v%s",
        release_name="Widget %s",
        changelog="* fixed things",
    )


@pytest.fixture
def release_record():
    return ReleaseRecord(
        id=42,
        tag_name="v1.2.0",
        name="Widget 1.2.0",
        html_url="https://github.com/acme/widget/releases/tag/v1.2.0",
    )


@pytest.fixture
def asset_dir():
    with tempfile.TemporaryDirectory() as tmpdir:
        dist = Path(tmpdir) / "dist"
        dist.mkdir()
        (dist / "widget-1.2.0.tar.gz").write_bytes(b"\x1f\x8b" + b"\0" * 100)
        (dist / "widget-1.2.0.zip").write_bytes(b"PK" + b"\0" * 100)
        (Path(tmpdir) / "notes.txt").write_bytes(b"hello world")
        yield tmpdir


def make_asset(name: str, asset_id: int = 1) -> AssetRecord:
    return AssetRecord(
        id=asset_id,
        name=name,
        size=102,
        browser_download_url=f"https://github.com/acme/widget/releases/download/v1.2.0/{name}",
    )
