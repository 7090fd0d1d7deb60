"""
Code-authored components.

To add a component, create a module here exposing a ``COMPONENT`` dict (either
field spelling is accepted) and append it to ``SAMPLE_COMPONENTS``.
"""

from vault.registry.catalog import burger_menu_button, stop_motion_button

SAMPLE_COMPONENTS: tuple[dict, ...] = (
    burger_menu_button.COMPONENT,
    stop_motion_button.COMPONENT,
)

__all__ = ["SAMPLE_COMPONENTS"]
