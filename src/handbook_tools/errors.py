"""
Structured error types for handbook tooling.

Every failure raised by handbook_tools is a HandbookError carrying a
category, structured context and an optional chained cause, so the CLI
can report it consistently and logs can include the same metadata.

Architecture:
    ::

        HandbookError (category, context, cause)
        ├── ConfigError            (CONFIG)
        │   └── InvalidConfigError
        ├── SourceError            (SOURCE)
        │   ├── HandbookRootNotFoundError
        │   └── DocumentReadError
        └── RenderError            (RENDER)

Examples:
    >>> error = InvalidConfigError("unknown key 'colour'")
    >>> error.category
    <ErrorCategory.CONFIG: 'CONFIG'>

    >>> error = DocumentReadError("cannot decode").with_context(path="a.md")
    >>> error.context.path
    'a.md'
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """Categories used to classify handbook errors."""

    CONFIG = "CONFIG"       # Missing or invalid configuration
    SOURCE = "SOURCE"       # Handbook root or document unavailable
    PARSE = "PARSE"         # Markdown could not be interpreted
    RENDER = "RENDER"       # Template rendering failures
    INTERNAL = "INTERNAL"   # Bugs, unexpected state


@dataclass
class ErrorContext:
    """
    Structured metadata attached to an error.

    Attributes:
        root: Handbook root being processed
        path: Document or config file involved
        line: Line number inside ``path``
        command: CLI command that was running
        metadata: Additional key-value pairs
    """

    root: str | None = None
    path: str | None = None
    line: int | None = None
    command: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging."""
        result = {}
        for key in ["root", "path", "line", "command"]:
            value = getattr(self, key)
            if value is not None:
                result[key] = value
        if self.metadata:
            result.update(self.metadata)
        return result


class HandbookError(Exception):
    """
    Base exception for all handbook tooling errors.

    Subclasses set ``default_category``; the CLI turns any HandbookError
    into a message on stderr and exit status 2.
    """

    default_category: ErrorCategory = ErrorCategory.INTERNAL

    def __init__(
        self,
        message: str,
        *,
        category: ErrorCategory | None = None,
        context: ErrorContext | None = None,
        cause: Exception | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.category = category or self.default_category
        self.context = context or ErrorContext()
        self.cause = cause

        if cause is not None:
            self.__cause__ = cause

    def with_context(self, **kwargs: Any) -> HandbookError:
        """
        Add context to this error (fluent API).

        Usage:
            raise DocumentReadError("Failed").with_context(path="docs/a.md")
        """
        for key, value in kwargs.items():
            if key != "metadata" and hasattr(self.context, key):
                setattr(self.context, key, value)
            else:
                self.context.metadata[key] = value
        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        result: dict[str, Any] = {
            "error_type": type(self).__name__,
            "message": self.message,
            "category": self.category.value,
        }
        context = self.context.to_dict()
        if context:
            result["context"] = context
        if self.cause is not None:
            result["cause"] = f"{type(self.cause).__name__}: {self.cause}"
        return result

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.message!r}, category={self.category.value})"


# =============================================================================
# CONFIG ERRORS
# =============================================================================


class ConfigError(HandbookError):
    """Configuration error."""

    default_category = ErrorCategory.CONFIG


class InvalidConfigError(ConfigError):
    """Configuration file or value is invalid."""

    def __init__(self, message: str, *, key: str | None = None, **kwargs: Any):
        super().__init__(message, **kwargs)
        self.key = key

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        if self.key:
            result["key"] = self.key
        return result


# =============================================================================
# SOURCE ERRORS
# =============================================================================


class SourceError(HandbookError):
    """The handbook or one of its documents could not be read."""

    default_category = ErrorCategory.SOURCE


class HandbookRootNotFoundError(SourceError):
    """Handbook root does not exist or is not a directory."""

    pass


class DocumentReadError(SourceError):
    """A Markdown document could not be read or decoded."""

    pass


# =============================================================================
# RENDER ERRORS
# =============================================================================


class RenderError(HandbookError):
    """A report or navigation index could not be rendered."""

    default_category = ErrorCategory.RENDER


__all__ = [
    "ErrorCategory",
    "ErrorContext",
    "HandbookError",
    "ConfigError",
    "InvalidConfigError",
    "SourceError",
    "HandbookRootNotFoundError",
    "DocumentReadError",
    "RenderError",
]
