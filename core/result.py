"""Tagged results for operations whose failures are expected.

Library functions return ``Ok`` or ``Err`` instead of raising so callers can
show the message and keep the process alive. Only the CLI entry points turn an
``Err`` into an exit code.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Generic, TypeVar

T = TypeVar("T")


class ErrorKind(str, Enum):
    """Failure categories shared by validation, stores and workflows."""

    # validation
    REQUIRED = "required"
    TOO_SHORT = "too_short"
    TOO_LONG = "too_long"
    INVALID_FORMAT = "invalid_format"
    WRONG_SUFFIX = "wrong_suffix"
    NO_SUBDOMAIN = "no_subdomain"
    MISMATCH = "mismatch"
    NOT_OBJECT = "not_object"
    INVALID_SHAPE = "invalid_shape"

    # lookups
    NOT_FOUND = "not_found"

    # storage
    IO_ERROR = "io_error"
    INVALID_JSON = "invalid_json"
    TOO_LARGE = "too_large"
    INVALID_CREDENTIALS = "invalid_credentials"
    UNSAFE_PATH = "unsafe_path"

    # external tools and the user
    PROCESS_ERROR = "process_error"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Successful outcome, optionally carrying data."""

    data: T = None  # type: ignore[assignment]
    success: bool = field(default=True, init=False)

    @property
    def error(self) -> None:
        return None


@dataclass(frozen=True)
class Err:
    """Failed outcome with a category and a human-readable message."""

    kind: ErrorKind
    error: str
    success: bool = field(default=False, init=False)

    @property
    def data(self) -> None:
        return None

    def prefixed(self, prefix: str) -> Err:
        """Same failure with ``prefix`` in front of the message."""
        return Err(self.kind, f"{prefix} {self.error}")


Result = Ok[T] | Err


def cancelled(message: str = "Cancelled") -> Err:
    return Err(ErrorKind.CANCELLED, message)
