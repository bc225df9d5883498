"""Status-tagged result values returned by every safe file operation."""

import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Generic, TypeVar, overload

logger = logging.getLogger(__name__)

T = TypeVar("T")


class StatusCode(str, Enum):
    OK = "OK"
    OFFLINE = "offline"  # reserved for connectivity-aware callers
    CACHED = "cached"
    ERROR = "error"
    NOT_FOUND = "not found"
    API_ERROR = "api error"  # reserved for upstream network callers


class EmptyResultError(Exception):
    """Raised by ``StatusResult.unwrap`` when there is no usable payload."""

    def __init__(self, result: "StatusResult[Any]"):
        self.result = result
        detail = f": {result.message}" if result.message else ""
        super().__init__(f"Result has no usable payload (status={result.status.value}){detail}")


@dataclass(frozen=True)
class StatusResult(Generic[T]):
    """Immutable payload + status + optional message.

    A result is *empty* when ``payload`` is None, whatever its status. A result
    *succeeded* when its status is OK or CACHED, whatever its payload.
    """

    payload: T | None = None
    status: StatusCode = StatusCode.OK
    message: str | None = None

    @classmethod
    def of(
        cls, payload: T | None, status: StatusCode = StatusCode.OK, message: str | None = None
    ) -> "StatusResult[T]":
        return cls(payload, status, message)

    @classmethod
    def empty(cls, status: StatusCode = StatusCode.OK, message: str | None = None) -> "StatusResult[None]":
        """Create a result without payload. A given message is logged as a warning."""
        if message:
            logger.warning(message)
        return cls(None, status, message)

    @classmethod
    def not_found(cls, message: str | None = None) -> "StatusResult[None]":
        return cls.empty(StatusCode.NOT_FOUND, message)

    @classmethod
    def error(cls, message: str | None = None) -> "StatusResult[None]":
        return cls.empty(StatusCode.ERROR, message)

    @classmethod
    def api_error(cls, message: str | None = None) -> "StatusResult[None]":
        return cls.empty(StatusCode.API_ERROR, message)

    @classmethod
    def ok(cls, payload: T, message: str | None = None) -> "StatusResult[T]":
        return cls(payload, StatusCode.OK, message)

    @overload
    @classmethod
    def cached(cls, value: "StatusResult[T]") -> "StatusResult[T]": ...

    @overload
    @classmethod
    def cached(cls, value: T) -> "StatusResult[T]": ...

    @classmethod
    def cached(cls, value):
        """Mark data as served from a cache.

        An existing result keeps its payload and message and gets status CACHED.
        Any other value is wrapped as the payload.
        """
        if isinstance(value, StatusResult):
            return value.with_status(StatusCode.CACHED)
        return cls(value, StatusCode.CACHED)

    @staticmethod
    def from_existing(result: "StatusResult[T]", status: StatusCode) -> "StatusResult[T]":
        """Copy payload and message from ``result`` with a new status."""
        return result.with_status(status)

    def with_status(self, status: StatusCode) -> "StatusResult[T]":
        return replace(self, status=status)

    @staticmethod
    def is_success(status: StatusCode) -> bool:
        return status in (StatusCode.OK, StatusCode.CACHED)

    def succeeded(self) -> bool:
        return StatusResult.is_success(self.status)

    def is_empty(self) -> bool:
        # Also usable unbound: StatusResult.is_empty(result)
        return self.payload is None

    def unwrap(self) -> T:
        """Return the payload, or raise EmptyResultError for empty/unsuccessful results."""
        if self.is_empty() or not self.succeeded():
            raise EmptyResultError(self)
        return self.payload
