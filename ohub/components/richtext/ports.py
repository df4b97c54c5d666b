"""
Richtext component port definitions.
"""

from __future__ import annotations

from typing import Protocol


class RulesPort(Protocol):
    """Port for accessing rich text rendering rules."""

    def get_fallback_html(self) -> str:
        """Get the HTML rendered for unusable documents."""
        ...

    def get_default_image_alt(self) -> str:
        """Get alt text for images without a title."""
        ...

    def get_embedded_entry_label(self) -> str:
        """Get the label shown for embedded entries."""
        ...

    def get_forbidden_protocols(self) -> frozenset[str]:
        """Get URL protocols that disqualify an image."""
        ...

    def get_class_names(self) -> dict[str, str]:
        """Get optional class attributes per tag."""
        ...
