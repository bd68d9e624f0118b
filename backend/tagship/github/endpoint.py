"""
TagShip — Remote endpoints and the client registry.

github.com is served from api.github.com / uploads.github.com; every other
host is treated as GitHub Enterprise with the /api/v3 and /api/uploads
path prefixes.
"""

from __future__ import annotations

from dataclasses import dataclass

import httpx

from tagship.github.auth import GitHubCredentials
from tagship.github.client import DEFAULT_TIMEOUT, GitHubClient
from tagship.utils.logging import logger

PUBLIC_HOST = "github.com"


@dataclass(frozen=True)
class RemoteEndpoint:
    host: str

    @property
    def is_public(self) -> bool:
        return self.host == PUBLIC_HOST

    @property
    def api_base_url(self) -> str:
        if self.is_public:
            return "https://api.github.com"
        return f"https://{self.host}/api/v3"

    @property
    def uploads_base_url(self) -> str:
        if self.is_public:
            return "https://uploads.github.com"
        return f"https://{self.host}/api/uploads"


class ClientRegistry:
    """
    One GitHubClient per (host, token), built on first use and reused after.

    Entries are never replaced. ``aclose`` shuts down every cached client.
    """

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.timeout = timeout
        self.transport = transport
        self._clients: dict[tuple[str, str], GitHubClient] = {}

    def __len__(self) -> int:
        return len(self._clients)

    def get(self, host: str, token: str) -> GitHubClient:
        key = (host, token)
        client = self._clients.get(key)
        if client is None:
            endpoint = RemoteEndpoint(host)
            logger.debug("  New GitHub client for %s (%s)", host, endpoint.api_base_url)
            client = GitHubClient(
                api_base_url=endpoint.api_base_url,
                uploads_base_url=endpoint.uploads_base_url,
                credentials=GitHubCredentials(token),
                timeout=self.timeout,
                transport=self.transport,
            )
            self._clients[key] = client
        return client

    async def aclose(self) -> None:
        for client in self._clients.values():
            await client.aclose()
