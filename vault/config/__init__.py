"""
Configuration Management.

Centralized configuration using Pydantic Settings. Values come from (in order
of precedence) environment variables, a .env file, then defaults.

Credentials (Supabase key, API key) are loaded from the environment and never
committed to source control.

Example:
    from vault.config import get_settings

    settings = get_settings()
    if settings.supabase_configured:
        ...
"""

from vault.config.settings import Settings, get_settings

__all__ = [
    "Settings",
    "get_settings",
]
