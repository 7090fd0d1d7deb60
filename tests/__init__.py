"""
The Vault Test Suite.

- unit/: normalizer, registry, stores, storage adapters and services
- integration/: HTTP API tests over the in-memory store
- conftest.py: Shared fixtures and test configuration

Run tests with: pytest
Run only unit tests: pytest tests/unit
"""
