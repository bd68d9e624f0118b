"""
TagShip — GitHub Releases API client.

Thin async wrapper around the three REST calls a publish run needs:

  GET  /repos/{owner}/{repo}/releases/tags/{tag}      — look up a release
  POST /repos/{owner}/{repo}/releases                 — create a release
  POST {uploads}/repos/{owner}/{repo}/releases/{id}/assets?name=…  — upload an asset

Any non-2xx response or transport failure raises RemoteCallError; retrying
and classification happen one layer up.
"""

from __future__ import annotations

import asyncio
import mimetypes
from pathlib import Path
from urllib.parse import quote

import httpx

from tagship.errors import RemoteCallError
from tagship.github.auth import GitHubCredentials
from tagship.models.release import AssetRecord, ReleaseRecord
from tagship.utils.logging import log_verbose

DEFAULT_TIMEOUT = 10.0


class GitHubClient:
    def __init__(
        self,
        api_base_url: str,
        uploads_base_url: str,
        credentials: GitHubCredentials,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.api_base_url = api_base_url.rstrip("/")
        self.uploads_base_url = uploads_base_url.rstrip("/")
        self._http = httpx.AsyncClient(
            headers=credentials.as_headers(),
            timeout=timeout,
            transport=transport,
        )

    async def aclose(self) -> None:
        await self._http.aclose()

    async def _request(self, method: str, url: str, **kwargs) -> httpx.Response:
        try:
            resp = await self._http.request(method, url, **kwargs)
        except httpx.TransportError as exc:
            raise RemoteCallError(None, "network", f"{type(exc).__name__}: {exc}") from exc
        if not resp.is_success:
            raise RemoteCallError(resp.status_code, str(resp.status_code), resp.text)
        return resp

    async def get_release_by_tag(self, owner: str, project: str, tag: str) -> ReleaseRecord:
        resp = await self._request(
            "GET",
            f"{self.api_base_url}/repos/{owner}/{project}/releases/tags/{quote(tag, safe='')}",
        )
        release = ReleaseRecord.model_validate(resp.json())
        log_verbose("  GitHub releases#getReleaseByTag: done (%s)", release.id)
        return release

    async def create_release(
        self,
        owner: str,
        project: str,
        tag_name: str,
        name: str,
        body: str,
        prerelease: bool,
        draft: bool,
    ) -> ReleaseRecord:
        resp = await self._request(
            "POST",
            f"{self.api_base_url}/repos/{owner}/{project}/releases",
            json={
                "tag_name": tag_name,
                "name": name,
                "body": body,
                "prerelease": prerelease,
                "draft": draft,
            },
        )
        data = resp.json()
        data["location"] = resp.headers.get("location")
        release = ReleaseRecord.model_validate(data)
        log_verbose(
            '  GitHub releases#createRelease: done (%s %s "%s")',
            release.location, release.tag_name, release.name,
        )
        return release

    async def upload_asset(
        self,
        owner: str,
        project: str,
        release_id: int,
        file_path: str,
        name: str,
    ) -> AssetRecord:
        content = await asyncio.to_thread(Path(file_path).read_bytes)
        content_type = mimetypes.guess_type(name)[0] or "application/octet-stream"
        resp = await self._request(
            "POST",
            f"{self.uploads_base_url}/repos/{owner}/{project}/releases/{release_id}/assets",
            params={"name": name},
            content=content,
            headers={"Content-Type": content_type},
        )
        asset = AssetRecord.model_validate(resp.json())
        log_verbose("  GitHub releases#uploadAsset: done (%s)", asset.browser_download_url)
        return asset
