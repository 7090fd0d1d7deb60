"""
Core infrastructure modules for The Vault.

Provides common utilities used across the application:
- exceptions: Standardized exception hierarchy
- logging: structlog configuration
"""

from vault.core.exceptions import (
    VaultError,
    RetryableError,
    PermanentError,
    ValidationError,
    NotFoundError,
    PersistenceError,
    MediaError,
    ConfigurationError,
)
from vault.core.logging import configure_logging

__all__ = [
    # Exceptions
    "VaultError",
    "RetryableError",
    "PermanentError",
    "ValidationError",
    "NotFoundError",
    "PersistenceError",
    "MediaError",
    "ConfigurationError",
    # Logging
    "configure_logging",
]
