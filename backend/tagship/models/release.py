"""
TagShip — Typed release data model.

The resolver, the asset publisher and the HTTP/CLI surfaces all work against
these models. GitHub payloads are validated into ReleaseRecord / AssetRecord
as soon as they come back from the client.
"""

from __future__ import annotations

import os
import re

from pydantic import BaseModel, ConfigDict, Field

from tagship.errors import RepoCoordinatesError
from tagship.utils.format import format_template

DEFAULT_HOST = "github.com"

_SCP_LIKE = re.compile(r"^[\w.-]+@(?P<host>[^:/]+):(?P<path>.+)$")
_URL_LIKE = re.compile(r"^[a-z+]+://(?:[^@/]+@)?(?P<host>[^/:]+)(?::\d+)?/(?P<path>.+)$")


class RepoCoordinates(BaseModel):
    model_config = ConfigDict(frozen=True)

    host: str = Field(default=DEFAULT_HOST, min_length=1)
    owner: str = Field(min_length=1)
    project: str = Field(min_length=1)

    @classmethod
    def parse(cls, value: str, host: str | None = None) -> RepoCoordinates:
        """
        Parse ``owner/project``, ``https://host/owner/project(.git)`` or
        ``git@host:owner/project(.git)``.

        An explicit ``host`` only applies to the short ``owner/project`` form.
        """
        raw = value.strip()
        found_host = host or DEFAULT_HOST
        path = raw

        match = _SCP_LIKE.match(raw) or _URL_LIKE.match(raw)
        if match:
            found_host = match.group("host")
            path = match.group("path")

        path = path.strip("/")
        if path.endswith(".git"):
            path = path[: -len(".git")]

        parts = path.split("/")
        if len(parts) != 2 or not all(parts):
            raise RepoCoordinatesError(value)

        return cls(host=found_host, owner=parts[0], project=parts[1])

    @property
    def slug(self) -> str:
        return f"{self.owner}/{self.project}"


class ReleaseRequest(BaseModel):
    """What to publish. ``tag_name`` and ``release_name`` are ``%s`` templates."""

    version: str = Field(min_length=1, max_length=100)
    tag_name: str = Field(default="%s", min_length=1)
    release_name: str = Field(default="Release %s")
    changelog: str = ""
    prerelease: bool = False
    draft: bool = False

    def resolved_tag(self) -> str:
        return format_template(self.tag_name, self.version)

    def resolved_name(self) -> str:
        return format_template(self.release_name, self.version)


class ReleaseRecord(BaseModel):
    id: int
    tag_name: str
    name: str | None = None
    html_url: str = ""
    upload_url: str = ""
    location: str | None = None


class AssetUploadRequest(BaseModel):
    release_id: int
    file_path: str = Field(min_length=1)
    name: str = Field(min_length=1)

    @classmethod
    def for_file(cls, release_id: int, file_path: str) -> AssetUploadRequest:
        return cls(release_id=release_id, file_path=file_path, name=os.path.basename(file_path))


class AssetRecord(BaseModel):
    id: int
    name: str
    size: int = 0
    content_type: str = ""
    browser_download_url: str = ""
