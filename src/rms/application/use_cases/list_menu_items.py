from __future__ import annotations

from rms.application.dto.responses import MenuItemListEnvelope
from rms.application.mappers.menu_mapper import to_menu_item_response
from rms.application.ports.repositories import MenuQuery, MenuRepository
from rms.application.use_cases.errors import InvalidMenuQueryError
from rms.application.use_cases.menu_cache import MenuListingCache

MAX_LIST_LIMIT = 500


class ListMenuItems:
    def __init__(self, repository: MenuRepository, cache: MenuListingCache) -> None:
        self._repository = repository
        self._cache = cache

    def execute(self, query: MenuQuery) -> MenuItemListEnvelope:
        if query.limit is not None and (query.limit < 1 or query.limit > MAX_LIST_LIMIT):
            raise InvalidMenuQueryError(f"limit must be between 1 and {MAX_LIST_LIMIT}")
        if query.skip < 0:
            raise InvalidMenuQueryError("skip must be >= 0")

        version = self._cache.current_version()
        if version is not None:
            cached = self._cache.get(version, query)
            if cached is not None:
                return cached

        items = self._repository.list_items(query)
        envelope = MenuItemListEnvelope(
            message="Menu items fetched successfully",
            data=[to_menu_item_response(item) for item in items],
        )
        if version is not None:
            self._cache.put(version, query, envelope)
        return envelope
