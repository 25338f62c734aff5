from __future__ import annotations

from rms.application.dto.responses import MenuItemResponse
from rms.application.mappers.menu_mapper import to_menu_item_response
from rms.application.ports.repositories import InvalidIdentifierError, MenuRepository
from rms.application.use_cases.errors import InvalidMenuItemIdError, MenuItemNotFoundError
from rms.domain.common.ids import MenuItemId


class GetMenuItem:
    def __init__(self, repository: MenuRepository) -> None:
        self._repository = repository

    def execute(self, item_id: MenuItemId) -> MenuItemResponse:
        try:
            item = self._repository.get(item_id)
        except InvalidIdentifierError as exc:
            raise InvalidMenuItemIdError("Invalid menu item ID format.") from exc

        if item is None:
            raise MenuItemNotFoundError("Menu item not found")
        return to_menu_item_response(item)
