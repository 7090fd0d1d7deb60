"""
The Vault FastAPI Application.

This module contains the REST API for The Vault:

- main: FastAPI application entry point and configuration
- routes/: API endpoint definitions organized by domain
- models: Pydantic request/response models
- dependencies: FastAPI dependency injection providers

API Structure:
- /health - Health check and readiness probes
- /metrics - Prometheus metrics
- /api/components - Dynamic component CRUD
- /api/categories - Category listing and authoring
- /api/media/upload - Preview media uploads
- /api/catalog - Merged read-only catalog
- /api/migration - Custom component migration

Example:
    from vault.api.main import app

    # Run with: uvicorn vault.api.main:app --reload
"""

from vault.api.main import app

__all__ = ["app"]
