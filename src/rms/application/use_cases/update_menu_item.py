from __future__ import annotations

from datetime import datetime, timezone

from rms.application.dto.requests import UpdateMenuItemRequest
from rms.application.dto.responses import MenuItemResponse
from rms.application.mappers.menu_mapper import to_menu_item_response
from rms.application.metrics.menu_catalog import record_menu_write
from rms.application.ports.repositories import InvalidIdentifierError, MenuRepository
from rms.application.use_cases.errors import (
    InvalidMenuItemIdError,
    MenuItemNotFoundError,
    MenuItemValidationError,
)
from rms.application.use_cases.menu_cache import MenuListingCache
from rms.domain.common.ids import MenuItemId
from rms.domain.menu.entities import InvalidMenuItemError, validate_menu_item_changes


class UpdateMenuItem:
    def __init__(self, repository: MenuRepository, cache: MenuListingCache) -> None:
        self._repository = repository
        self._cache = cache

    def execute(self, item_id: MenuItemId, request_dto: UpdateMenuItemRequest) -> MenuItemResponse:
        # only fields present in the body are replaced; identifiers never reach the store
        try:
            changes = validate_menu_item_changes(request_dto.model_dump(exclude_unset=True))
        except InvalidMenuItemError as exc:
            raise MenuItemValidationError(str(exc)) from exc

        try:
            updated = self._repository.update(
                item_id,
                changes=changes,
                updated_at=datetime.now(timezone.utc),
            )
        except InvalidIdentifierError as exc:
            raise InvalidMenuItemIdError("Invalid menu item ID format.") from exc

        if updated is None:
            raise MenuItemNotFoundError("Menu item not found for update")

        record_menu_write("update")
        self._cache.invalidate()
        return to_menu_item_response(updated)
