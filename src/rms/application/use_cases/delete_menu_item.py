from __future__ import annotations

from rms.application.metrics.menu_catalog import record_menu_write
from rms.application.ports.repositories import InvalidIdentifierError, MenuRepository
from rms.application.use_cases.errors import InvalidMenuItemIdError, MenuItemNotFoundError
from rms.application.use_cases.menu_cache import MenuListingCache
from rms.domain.common.ids import MenuItemId


class DeleteMenuItem:
    def __init__(self, repository: MenuRepository, cache: MenuListingCache) -> None:
        self._repository = repository
        self._cache = cache

    def execute(self, item_id: MenuItemId) -> None:
        try:
            deleted = self._repository.delete(item_id)
        except InvalidIdentifierError as exc:
            raise InvalidMenuItemIdError("Invalid menu item ID format.") from exc

        if not deleted:
            raise MenuItemNotFoundError("Menu item not found for deletion")

        record_menu_write("delete")
        self._cache.invalidate()
