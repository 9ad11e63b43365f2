"""Error taxonomy for the dispatch and routing core."""

from __future__ import annotations


class OmniError(Exception):
    """Base class for omni errors."""


class ConfigParseError(OmniError, ValueError):
    """Hook (or other declarative) configuration could not be parsed."""


class UnauthorizedAccess(OmniError):
    """Caller failed an authorization check."""


class HandlerFailure(OmniError):
    """A task handler raised inside the bounded concurrency runner."""

    def __init__(self, index: int, error: BaseException):
        super().__init__(f"Handler failed for item {index}: {error}")
        self.index = index
        self.error = error


class StoreUnavailable(OmniError):
    """A text-store backend could not complete an operation."""

    def __init__(self, operation: str, key: str, reason: str = ""):
        detail = f"{operation} {key!r} failed"
        if reason:
            detail = f"{detail}: {reason}"
        super().__init__(detail)
        self.operation = operation
        self.key = key
        self.reason = reason
