"""
Core exception hierarchy for The Vault.

Provides standardized exception types for the component catalog. The API layer
maps each type to a status code; services raise these instead of generic
Exception.
"""

from typing import Any, Optional


# =============================================================================
# Base Exceptions
# =============================================================================


class VaultError(Exception):
    """Base exception for all Vault errors."""

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class RetryableError(VaultError):
    """
    Transient errors that may succeed when retried.

    Examples: timeouts, dropped connections to the store.
    """

    pass


class PermanentError(VaultError):
    """
    Errors that won't be fixed by retrying.

    Examples: invalid input, missing records, misconfiguration.
    """

    pass


# =============================================================================
# Request Errors
# =============================================================================


class ValidationError(PermanentError):
    """Caller-supplied input failed required-field or shape checks."""

    def __init__(self, fields: list[str], message: Optional[str] = None):
        self.fields = list(fields)
        super().__init__(
            message or f"Missing or invalid fields: {', '.join(self.fields)}",
            {"fields": self.fields},
        )


class NotFoundError(PermanentError):
    """Requested id or slug has no corresponding record."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(
            f"{resource} '{identifier}' not found",
            {"resource": resource, "identifier": identifier},
        )


# =============================================================================
# Backend Errors
# =============================================================================


class PersistenceError(VaultError):
    """An operation against the dynamic store failed.

    The underlying exception is kept on ``cause`` for server-side logging;
    clients only see the generic message.
    """

    def __init__(
        self,
        operation: str,
        cause: Optional[BaseException] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        self.operation = operation
        self.cause = cause
        message = f"Store operation '{operation}' failed"
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message, {"operation": operation, **(details or {})})


class MediaError(VaultError):
    """An upload or delete against the media storage backend failed."""

    def __init__(
        self,
        operation: str,
        message: str,
        details: Optional[dict[str, Any]] = None,
    ):
        self.operation = operation
        super().__init__(f"[{operation}] {message}", details)


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigurationError(PermanentError):
    """Raised when configuration is invalid or missing."""

    def __init__(self, message: str, config_key: Optional[str] = None):
        self.config_key = config_key
        details = {"config_key": config_key} if config_key else None
        super().__init__(message, details)
