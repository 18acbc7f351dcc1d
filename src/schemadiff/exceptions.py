"""
Exception classes for schemadiff.

Comparing schemas never raises; these cover building malformed column
definitions or changes, reading schema documents and loading config.
"""

from typing import Any, Dict, Optional


class SchemadiffError(Exception):
    """Base exception for schemadiff, carrying context about the failing input."""

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.cause = cause

    def __str__(self) -> str:
        parts = [self.message]
        if self.details:
            parts.append("[" + ", ".join(f"{k}={v}" for k, v in self.details.items()) + "]")
        if self.cause:
            parts.append(f"(caused by: {self.cause})")
        return " ".join(parts)


class ConfigurationError(SchemadiffError):
    """Raised when a schemadiff config file is missing, unparsable or invalid."""


class ValidationError(SchemadiffError):
    """Raised when a column definition or change is malformed."""


class SchemaLoadError(SchemadiffError):
    """Raised when a schema document cannot be read or has the wrong shape."""

    def __init__(
        self,
        path: str,
        reason: str,
        cause: Optional[Exception] = None,
    ) -> None:
        super().__init__(
            f"Cannot load schema: {reason}",
            {"path": path},
            cause,
        )
        self.path = path
        self.reason = reason
