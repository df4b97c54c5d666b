"""Shared fixtures: the project rules file, a fake CMS and a fixed clock."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

import pytest

from ohub.api.deps import _contentful_client, get_rules, get_settings
from ohub.components.content import ContentSourceError, EntryCollection
from ohub.rules.loader import load_rules
from ohub.rules.models import Rules

ROOT = Path(__file__).resolve().parent.parent
RULES_PATH = ROOT / "rules.yaml"

NOW = datetime(2025, 3, 4, 12, 0, tzinfo=UTC)


class FakeSource:
    """In-memory content source; no network."""

    def __init__(self, configured: bool = True) -> None:
        self.configured = configured
        self.collections: dict[str, EntryCollection] = {}
        self.errors: dict[str, ContentSourceError] = {}
        self.calls: list[tuple[str, dict[str, Any]]] = []
        self.probe: EntryCollection | ContentSourceError = EntryCollection()

    def is_configured(self) -> bool:
        return self.configured

    def credential_status(self) -> dict[str, bool]:
        return {"space_id": self.configured, "access_token": self.configured}

    def get_entries(
        self,
        content_type: str,
        params: Mapping[str, Any] | None = None,
    ) -> EntryCollection:
        self.calls.append((content_type, dict(params or {})))
        if content_type in self.errors:
            raise self.errors[content_type]
        return self.collections.get(content_type, EntryCollection())

    def check_connection(self) -> EntryCollection:
        if isinstance(self.probe, ContentSourceError):
            raise self.probe
        return self.probe


class FixedClock:
    """Clock pinned to NOW, advanced manually."""

    def __init__(self, now: datetime = NOW) -> None:
        self.current = now

    def now(self) -> datetime:
        return self.current


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Point settings at the project rules file with no CMS credentials."""
    monkeypatch.setenv("OHUB_RULES_PATH", str(RULES_PATH))
    for name in (
        "CONTENTFUL_SPACE_ID",
        "CONTENTFUL_ACCESS_TOKEN",
        "CONTENTFUL_ENVIRONMENT",
        "OHUB_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    get_rules.cache_clear()
    _contentful_client.cache_clear()
    yield
    get_settings.cache_clear()
    get_rules.cache_clear()
    _contentful_client.cache_clear()


@pytest.fixture
def rules() -> Rules:
    return load_rules(RULES_PATH)


@pytest.fixture
def source() -> FakeSource:
    """Configured fake CMS with no entries."""
    return FakeSource()


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock()
