"""edgelet-docker — Exception hierarchy.

All exceptions raised by the runtime inherit from EdgeletError so that callers
can catch the full family with a single except clause when needed.

Hierarchy:
    EdgeletError
    ├── ValidationError
    │   ├── ArgumentEmptyError
    │   └── ModuleTypeMismatchError
    ├── ConfigurationError
    ├── EngineError
    └── SerializationError
"""

from __future__ import annotations

from typing import Any


class EdgeletError(Exception):
    """Base exception for all edgelet-docker errors."""

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.context: dict[str, Any] = context or {}

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, context={self.context})"


# ---------------------------------------------------------------------------
# Input validation — raised before any engine request is issued
# ---------------------------------------------------------------------------


class ValidationError(EdgeletError):
    """An argument was rejected before reaching the engine."""


class ArgumentEmptyError(ValidationError):
    """A name or id argument was empty or only whitespace."""

    def __init__(self, argument: str) -> None:
        super().__init__(
            f"Argument '{argument}' must not be empty",
            context={"argument": argument},
        )
        self.argument = argument


class ModuleTypeMismatchError(ValidationError):
    """A module spec targets a runtime other than this one."""

    def __init__(self, expected: str, actual: str) -> None:
        super().__init__(
            f"Module type '{actual}' is not supported by this runtime (expected '{expected}')",
            context={"expected": expected, "actual": actual},
        )
        self.expected = expected
        self.actual = actual


# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------


class ConfigurationError(EdgeletError):
    """The engine endpoint could not be turned into a usable client."""

    def __init__(self, message: str, url: str | None = None) -> None:
        super().__init__(message, context={"url": url})
        self.url = url


# ---------------------------------------------------------------------------
# Engine interaction
# ---------------------------------------------------------------------------


class EngineError(EdgeletError):
    """The engine returned a non-success response or could not be reached."""

    def __init__(
        self,
        message: str,
        operation: str,
        status_code: int | None = None,
    ) -> None:
        super().__init__(
            message,
            context={"operation": operation, "status_code": status_code},
        )
        self.operation = operation
        self.status_code = status_code


class SerializationError(EdgeletError):
    """Credentials or filters could not be encoded for the engine."""
