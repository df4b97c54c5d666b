"""
Contentful Content Delivery API adapter.

Implements ContentSourcePort over HTTPS with `requests`.

Key behaviors:
- `GET {base_url}/spaces/{space}/environments/{env}/entries` with a Bearer token
- Responses are cached per (content type, query) with a TTL per content type;
  expired entries are dropped and the oldest entry is evicted past `cache_max_entries`
- Network failures raise ContentSourceUnavailableError; error statuses and
  unreadable bodies raise ContentSourceResponseError
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any

import requests

from ohub.adapters.clock import SystemClock
from ohub.components.content import (
    ClockPort,
    ContentSourceNotConfiguredError,
    ContentSourceResponseError,
    ContentSourceUnavailableError,
    EntryCollection,
)

logger = logging.getLogger(__name__)

CDN_BASE_URL = "https://cdn.contentful.com"
DEFAULT_TIMEOUT_SECONDS = 10.0
DEFAULT_CACHE_TTL_SECONDS = 60
DEFAULT_CACHE_MAX_ENTRIES = 500

# Revalidation windows per content type
DEFAULT_CACHE_TTLS: dict[str, int] = {
    "category": 60,
    "guideline": 60,
    "policyPage": 3600,
    "opportunity": 1800,
}

CacheKey = tuple[str, tuple[tuple[str, str], ...]]


@dataclass(frozen=True)
class _CacheEntry:
    collection: EntryCollection
    expires_at: datetime


class ContentfulClient:
    """
    Read-only Contentful client.

    One instance per process; the cache is in memory and not shared.
    """

    def __init__(
        self,
        space_id: str | None,
        access_token: str | None,
        environment: str = "master",
        *,
        base_url: str = CDN_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        cache_ttls: Mapping[str, int] | None = None,
        cache_max_entries: int = DEFAULT_CACHE_MAX_ENTRIES,
        clock: ClockPort | None = None,
        session: requests.Session | None = None,
    ) -> None:
        """Initialize client. Missing credentials leave it unconfigured."""
        self._space_id = space_id or None
        self._access_token = access_token or None
        self._environment = environment or "master"
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._cache_ttls = dict(DEFAULT_CACHE_TTLS if cache_ttls is None else cache_ttls)
        self._cache_max_entries = max(1, cache_max_entries)
        self._clock = clock or SystemClock()
        self._session = session or requests.Session()
        self._cache: dict[CacheKey, _CacheEntry] = {}

    @property
    def entries_url(self) -> str:
        return (
            f"{self._base_url}/spaces/{self._space_id}"
            f"/environments/{self._environment}/entries"
        )

    def is_configured(self) -> bool:
        return bool(self._space_id and self._access_token)

    def credential_status(self) -> dict[str, bool]:
        return {
            "space_id": self._space_id is not None,
            "access_token": self._access_token is not None,
        }

    # --- Queries ---

    def get_entries(
        self,
        content_type: str,
        params: Mapping[str, Any] | None = None,
    ) -> EntryCollection:
        """
        Query entries of one content type.

        Raises:
            ContentSourceNotConfiguredError: if credentials are missing.
            ContentSourceUnavailableError: on network failure.
            ContentSourceResponseError: on error status or bad JSON.
        """
        query = {"content_type": content_type}
        query.update({key: str(value) for key, value in (params or {}).items()})

        key: CacheKey = (content_type, tuple(sorted(query.items())))
        now = self._clock.now()
        cached = self._cache.get(key)
        if cached is not None:
            if cached.expires_at > now:
                logger.debug("Cache hit for %s", content_type)
                return cached.collection
            del self._cache[key]

        collection = self._fetch(query)

        ttl = self._cache_ttls.get(content_type, DEFAULT_CACHE_TTL_SECONDS)
        if ttl > 0:
            self._store(key, _CacheEntry(collection, now + timedelta(seconds=ttl)), now)
        return collection

    def check_connection(self) -> EntryCollection:
        """Fetch one entry of any type, bypassing the cache."""
        return self._fetch({"limit": "1"})

    def clear_cache(self) -> None:
        self._cache.clear()

    @property
    def cache_size(self) -> int:
        return len(self._cache)

    def _store(self, key: CacheKey, entry: _CacheEntry, now: datetime) -> None:
        """Insert an entry, dropping expired ones and then the oldest past the cap."""
        for stale in [k for k, v in self._cache.items() if v.expires_at <= now]:
            del self._cache[stale]
        while len(self._cache) >= self._cache_max_entries:
            # dicts keep insertion order, so the first key is the oldest
            del self._cache[next(iter(self._cache))]
        self._cache[key] = entry

    # --- HTTP ---

    def _fetch(self, query: Mapping[str, str]) -> EntryCollection:
        if not self.is_configured():
            raise ContentSourceNotConfiguredError("Contentful credentials are not set")

        try:
            response = self._session.get(
                self.entries_url,
                params=dict(query),
                headers={
                    "Authorization": f"Bearer {self._access_token}",
                    "Content-Type": "application/json",
                },
                timeout=self._timeout,
            )
            response.raise_for_status()
        except (requests.ConnectionError, requests.Timeout) as e:
            logger.warning("Contentful unreachable: %s", e)
            raise ContentSourceUnavailableError(f"fetch failed: {e}") from e
        except requests.HTTPError as e:
            status_code = e.response.status_code if e.response is not None else None
            reason = e.response.reason if e.response is not None else ""
            logger.error("Contentful API error: %s %s", status_code, reason)
            raise ContentSourceResponseError(
                f"Contentful API error: {status_code} {reason}".strip(),
                status_code=status_code,
            ) from e
        except requests.RequestException as e:
            raise ContentSourceUnavailableError(f"fetch failed: {e}") from e

        try:
            data = response.json()
        except ValueError as e:
            raise ContentSourceResponseError(f"Invalid JSON from Contentful: {e}") from e

        return parse_collection(data)


def parse_collection(data: Any) -> EntryCollection:
    """Build an EntryCollection from a delivery API response body."""
    if not isinstance(data, dict):
        raise ContentSourceResponseError("Unexpected Contentful response shape")

    items = data.get("items")
    includes = data.get("includes")
    total = data.get("total")
    return EntryCollection(
        items=[item for item in items if isinstance(item, dict)] if isinstance(items, list) else [],
        includes=includes if isinstance(includes, dict) else {},
        total=total if isinstance(total, int) else 0,
    )
