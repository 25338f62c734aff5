from __future__ import annotations

import hashlib
import json
from dataclasses import asdict

from pydantic import ValidationError

from rms.application.dto.responses import MenuItemListEnvelope
from rms.application.metrics.menu_catalog import record_cache_lookup
from rms.application.ports.cache import CacheStore
from rms.application.ports.repositories import MenuQuery

CATALOG_VERSION_CACHE_KEY = "menu:catalog:version"


def menu_listing_cache_key(version: int, query: MenuQuery) -> str:
    canonical = json.dumps(asdict(query), sort_keys=True, separators=(",", ":"))
    digest = hashlib.sha256(canonical.encode("utf-8")).hexdigest()[:16]
    return f"menu:catalog:v{version}:{digest}"


class MenuListingCache:
    """Version-keyed cache for menu listings.

    Every catalog write bumps the version key, so listings cached under an
    older version are never read again and simply expire. The version must
    be read before the store is queried; a listing is then stored under that
    version. Cache failures degrade to a miss.
    """

    def __init__(self, cache: CacheStore, ttl_seconds: int = 300) -> None:
        self._cache = cache
        self._ttl_seconds = ttl_seconds

    def current_version(self) -> int | None:
        try:
            raw = self._cache.get(CATALOG_VERSION_CACHE_KEY)
        except Exception:
            return None
        if raw is None:
            return 0
        try:
            return int(raw)
        except ValueError:
            return None

    def get(self, version: int, query: MenuQuery) -> MenuItemListEnvelope | None:
        try:
            payload = self._cache.get(menu_listing_cache_key(version, query))
        except Exception:
            payload = None

        if payload:
            try:
                envelope = MenuItemListEnvelope.model_validate_json(payload)
            except ValidationError:
                envelope = None
            if envelope is not None:
                record_cache_lookup(hit=True)
                return envelope

        record_cache_lookup(hit=False)
        return None

    def put(self, version: int, query: MenuQuery, envelope: MenuItemListEnvelope) -> None:
        try:
            self._cache.set(
                menu_listing_cache_key(version, query),
                envelope.model_dump_json(by_alias=True),
                ttl_seconds=self._ttl_seconds,
            )
        except Exception:
            return

    def invalidate(self) -> None:
        try:
            self._cache.incr(CATALOG_VERSION_CACHE_KEY)
        except Exception:
            return
