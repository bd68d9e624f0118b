"""
TagShip — Remote error classification.

Decides whether a failed remote call is worth retrying and turns the
GitHub error body into a one-line message:

  422 422: Validation Failed (already_exists)

401, 404 and 422 can never succeed on a retry. Everything else (network
errors, 5xx, rate limiting, timeouts) is retryable.
"""

from __future__ import annotations

import json
import re

from tagship.errors import RemoteCallError
from tagship.models.outcome import ClassifiedError
from tagship.utils.logging import logger

NO_RETRIES_NEEDED = frozenset({401, 404, 422})

_NEWLINES = re.compile(r"[\n\r]+")


def format_error_message(error: BaseException) -> str:
    """Composite message from a structured body, or ``str(error)`` if there is none."""
    code = getattr(error, "code", None)
    status = getattr(error, "status", None)
    body = getattr(error, "body", None) or str(error)
    try:
        parsed = json.loads(body)
        message = parsed["message"]
        codes = [str(e.get("code")) for e in parsed.get("errors") or []]
        return f"{code} {status}: {_NEWLINES.sub(' ', message)} ({', '.join(codes)})"
    except (ValueError, TypeError, KeyError, AttributeError) as exc:
        logger.debug("Unstructured remote error body (%s): %r", exc, body[:200])
    return str(error)


def classify_error(error: BaseException) -> ClassifiedError:
    code = error.code if isinstance(error, RemoteCallError) else None
    return ClassifiedError(
        is_terminal=code in NO_RETRIES_NEEDED,
        message=format_error_message(error),
        raw_code=code,
    )
