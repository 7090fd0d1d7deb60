"""
The Vault - catalog and showcase service for reusable UI components.

This package contains the core modules for The Vault:
- api: FastAPI application and endpoints
- config: Pydantic settings and configuration
- core: exceptions and logging setup
- media: media type resolution and file naming
- models: canonical Component models
- normalization: raw record normalizer, slugs, derived summaries
- registry: code-authored components compiled into the app
- store: dynamic component store backends
- storage: preview media storage backends
- services: component CRUD, categories, aggregation and migration
- monitoring: Prometheus metrics
"""

__version__ = "0.1.0"
