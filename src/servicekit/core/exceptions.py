"""Exception hierarchy for servicekit.

Two families of errors originate here:

- Configuration errors, raised synchronously when a candidate configuration
  value does not match its schema.
- Lifecycle errors, delivered asynchronously through the readiness future
  when service startup does not complete.

Every error carries a machine-readable ``error_code`` and a ``details``
mapping so that callers can log or report them uniformly.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

MILLISECONDS_PER_SECOND = 1000


@dataclass(frozen=True)
class FieldError:
    """A single structural validation failure."""

    constituent: str
    path: str
    message: str
    error_type: str = "value_error"

    def __str__(self) -> str:
        location = self.path or "<root>"
        return f"{self.constituent}: {location}: {self.message}"


class ServiceKitBaseError(Exception):
    """Base exception for all servicekit errors."""

    def __init__(
        self,
        message: str,
        *,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.error_code = error_code
        self.details = details or {}

    def __str__(self) -> str:
        if self.error_code:
            return f"[{self.error_code}] {super().__str__()}"
        return super().__str__()


# ==============================================================================
# Configuration Exceptions
# ==============================================================================


class ConfigurationError(ServiceKitBaseError):
    """Raised when configuration is invalid or missing."""

    def __init__(
        self,
        message: str,
        *,
        config_key: str | None = None,
        error_code: str = "CONFIGURATION_ERROR",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, error_code=error_code, details=details)
        self.config_key = config_key


class ConfigValidationError(ConfigurationError):
    """Raised when a configuration value does not match its schema.

    Carries every field-level failure found in a single validation pass, each
    tagged with the constituent schema that rejected it.
    """

    def __init__(self, errors: Iterable[FieldError]) -> None:
        self.errors = tuple(errors)
        self.constituents = tuple(dict.fromkeys(e.constituent for e in self.errors))

        lines = "\n".join(f"  • {error}" for error in self.errors)
        message = f"Configuration validation failed:\n{lines}"
        first_path = self.errors[0].path if self.errors else None
        super().__init__(
            message,
            config_key=first_path,
            error_code="CONFIG_VALIDATION_ERROR",
            details={
                "constituents": list(self.constituents),
                "errors": [
                    {
                        "constituent": e.constituent,
                        "path": e.path,
                        "message": e.message,
                        "type": e.error_type,
                    }
                    for e in self.errors
                ],
            },
        )

    def paths(self) -> list[str]:
        """Return the dotted field paths that failed validation."""
        return [error.path for error in self.errors]


# ==============================================================================
# Lifecycle Exceptions
# ==============================================================================


class LifecycleError(ServiceKitBaseError):
    """Base class for service lifecycle errors."""


class InitializationTimeoutError(LifecycleError):
    """Raised when a service does not signal readiness before its deadline."""

    def __init__(self, timeout_ms: float) -> None:
        self.timeout_ms = timeout_ms
        self.timeout_seconds = timeout_ms / MILLISECONDS_PER_SECOND
        message = (
            "INITIALIZATION FAILED: Service took longer than configured "
            f"{self.timeout_seconds:.2f} seconds to initialize and is therefore "
            "considered failed. Make sure you call the `initialized()` function "
            "on the resulting dependency container to mark that the process has "
            "successfully initialized."
        )
        super().__init__(
            message,
            error_code="INITIALIZATION_TIMEOUT",
            details={"timeout_ms": timeout_ms},
        )


class InitializationFailedError(LifecycleError):
    """Raised when startup code explicitly reports that initialization failed."""

    def __init__(self, reason: str | None = None) -> None:
        message = "INITIALIZATION FAILED: Service reported a startup failure"
        if reason:
            message += f": {reason}"
        super().__init__(
            message,
            error_code="INITIALIZATION_FAILED",
            details={"reason": reason} if reason else None,
        )
        self.reason = reason
