from __future__ import annotations

from datetime import datetime, timezone

from rms.application.dto.requests import CreateMenuItemRequest
from rms.application.dto.responses import MenuItemResponse
from rms.application.mappers.menu_mapper import to_menu_item_response
from rms.application.metrics.menu_catalog import record_menu_write
from rms.application.ports.repositories import MenuRepository
from rms.application.use_cases.errors import MenuItemValidationError
from rms.application.use_cases.menu_cache import MenuListingCache
from rms.domain.menu.entities import InvalidMenuItemError, create_menu_item


class CreateMenuItem:
    def __init__(self, repository: MenuRepository, cache: MenuListingCache) -> None:
        self._repository = repository
        self._cache = cache

    def execute(self, request_dto: CreateMenuItemRequest) -> MenuItemResponse:
        try:
            item = create_menu_item(
                name=request_dto.name,
                category=request_dto.category,
                price=request_dto.price,
                ingredients=request_dto.ingredients,
                tags=request_dto.tags,
                availability=request_dto.availability,
                now=datetime.now(timezone.utc),
            )
        except InvalidMenuItemError as exc:
            raise MenuItemValidationError(str(exc)) from exc

        created = self._repository.add(item)
        record_menu_write("create")
        self._cache.invalidate()
        return to_menu_item_response(created)
