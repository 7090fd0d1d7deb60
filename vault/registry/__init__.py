"""
Static component registry.

- components: ComponentRegistry, the read-only source of code-authored components
- catalog: the bundled component definitions
"""

from vault.registry.components import ComponentRegistry, build_registry

__all__ = ["ComponentRegistry", "build_registry"]
