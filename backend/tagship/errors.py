"""
TagShip — Structured error catalog.

Every error has a code, human message, and suggested fix.
Raw transport exceptions are classified before they leave the retry layer.
"""

from __future__ import annotations

from typing import Any


class TagShipError(Exception):
    """Base error with structured code + suggestion."""

    def __init__(self, code: str, message: str, suggestion: str = "", detail: Any = None):
        self.code = code
        self.message = message
        self.suggestion = suggestion
        self.detail = detail
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {
            "error_code": self.code,
            "message": self.message,
        }
        if self.suggestion:
            d["suggestion"] = self.suggestion
        if self.detail:
            d["detail"] = self.detail
        return d


class ConfigError(TagShipError):
    def __init__(self, missing: list[str]):
        self.missing = missing
        super().__init__(
            code="CONFIG_MISSING",
            message=f"Missing configuration: {', '.join(missing)}",
            suggestion="Set the variables in the environment or in backend/.env.",
            detail=missing,
        )


class RepoCoordinatesError(TagShipError):
    def __init__(self, value: str):
        super().__init__(
            code="REPO_INVALID",
            message=f"Cannot parse repository: {value!r}",
            suggestion="Use owner/project, https://host/owner/project or git@host:owner/project.git.",
        )


class RemoteCallError(Exception):
    """
    Raw failure of a single remote call.

    ``code`` is the HTTP status (None for transport failures), ``status`` the
    status label and ``body`` the response text, which GitHub usually sends
    as ``{"message": ..., "errors": [{"code": ...}]}``.
    """

    def __init__(self, code: int | None, status: str, body: str = ""):
        self.code = code
        self.status = status
        self.body = body
        super().__init__(body or status)


class TerminalRemoteError(TagShipError):
    def __init__(self, message: str, raw_code: int | None = None):
        self.raw_code = raw_code
        super().__init__(
            code="REMOTE_TERMINAL",
            message=message,
            suggestion="Check the token permissions, the repository name and the release parameters.",
            detail={"http_status": raw_code} if raw_code else None,
        )


class TransientRemoteError(TagShipError):
    def __init__(self, message: str, raw_code: int | None = None, attempts: int = 0):
        self.raw_code = raw_code
        self.attempts = attempts
        super().__init__(
            code="REMOTE_RETRIES_EXHAUSTED",
            message=message,
            suggestion="The remote service kept failing. Retry later or check its status page.",
            detail={"http_status": raw_code, "attempts": attempts},
        )


class FallbackExhaustedError(TagShipError):
    def __init__(self, tag_name: str, message: str):
        self.tag_name = tag_name
        super().__init__(
            code="RELEASE_CREATE_FAILED",
            message=message,
            suggestion=f"No release for tag {tag_name} could be found or created.",
        )
