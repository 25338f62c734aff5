from __future__ import annotations

from rms.application.dto.responses import MenuItemResponse
from rms.domain.menu.entities import MenuItem


def to_menu_item_response(item: MenuItem) -> MenuItemResponse:
    return MenuItemResponse(
        id=str(item.item_id),
        name=item.name,
        category=item.category,
        price=item.price,
        ingredients=list(item.ingredients),
        tags=list(item.tags),
        availability=item.availability,
        createdAt=item.created_at,
        updatedAt=item.updated_at,
    )
