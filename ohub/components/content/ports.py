"""
Content component port definitions.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime
from typing import Any, Protocol

from .models import EntryCollection


class ContentSourcePort(Protocol):
    """
    Read-only access to a headless CMS.

    Implementations raise the ContentSourceError family; they never return
    partial results for a failed request.
    """

    def is_configured(self) -> bool:
        """Check if credentials are present."""
        ...

    def credential_status(self) -> dict[str, bool]:
        """Report which credentials are set (keys: space_id, access_token)."""
        ...

    def get_entries(
        self,
        content_type: str,
        params: Mapping[str, Any] | None = None,
    ) -> EntryCollection:
        """Query entries of one content type."""
        ...

    def check_connection(self) -> EntryCollection:
        """Fetch a single entry of any type, bypassing caches."""
        ...


class ClockPort(Protocol):
    def now(self) -> datetime:
        """Return current UTC time."""
        ...
