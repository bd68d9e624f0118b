"""
TagShip — Remote call outcomes.

A remote call ends in exactly one of three terminal states:

  ATTEMPTING → SUCCEEDED
  ATTEMPTING → FAILED_TERMINAL   (classified terminal, no further attempts)
  ATTEMPTING → FAILED_EXHAUSTED  (retryable, but the budget ran out)
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any, Generic, TypeVar, Union

from tagship.errors import TerminalRemoteError, TransientRemoteError

T = TypeVar("T")


class CallState(str, enum.Enum):
    ATTEMPTING = "ATTEMPTING"
    SUCCEEDED = "SUCCEEDED"
    FAILED_TERMINAL = "FAILED_TERMINAL"
    FAILED_EXHAUSTED = "FAILED_EXHAUSTED"


@dataclass(frozen=True)
class ClassifiedError:
    is_terminal: bool
    message: str
    raw_code: int | None = None


@dataclass(frozen=True)
class Succeeded(Generic[T]):
    payload: T
    attempts: int = 1

    @property
    def state(self) -> CallState:
        return CallState.SUCCEEDED

    def unwrap(self) -> T:
        return self.payload


@dataclass(frozen=True)
class Failed:
    error: ClassifiedError
    attempts: int
    cause: BaseException | None = None

    @property
    def state(self) -> CallState:
        if self.error.is_terminal:
            return CallState.FAILED_TERMINAL
        return CallState.FAILED_EXHAUSTED

    def unwrap(self) -> Any:
        """Raise the exception matching this failure."""
        if self.error.is_terminal:
            exc: Exception = TerminalRemoteError(self.error.message, self.error.raw_code)
        else:
            exc = TransientRemoteError(self.error.message, self.error.raw_code, self.attempts)
        raise exc from self.cause


CallOutcome = Union[Succeeded[T], Failed]
