from __future__ import annotations

from fastapi import APIRouter, Depends, status

from rms.api.dependencies import get_menu_listing_cache, get_menu_repository
from rms.application.dto.requests import CreateMenuItemRequest, UpdateMenuItemRequest
from rms.application.dto.responses import (
    MenuItemEnvelope,
    MenuItemListEnvelope,
    MessageResponse,
)
from rms.application.ports.repositories import MenuQuery, MenuRepository
from rms.application.use_cases.create_menu_item import CreateMenuItem
from rms.application.use_cases.delete_menu_item import DeleteMenuItem
from rms.application.use_cases.get_menu_item import GetMenuItem
from rms.application.use_cases.list_menu_items import ListMenuItems
from rms.application.use_cases.menu_cache import MenuListingCache
from rms.application.use_cases.update_menu_item import UpdateMenuItem
from rms.domain.common.ids import MenuItemId

router = APIRouter(prefix="/api/menu", tags=["menu"])


@router.get("", response_model=MenuItemListEnvelope)
def list_menu_items(
    category: str | None = None,
    tag: str | None = None,
    available: bool | None = None,
    limit: int | None = None,
    skip: int = 0,
    repository: MenuRepository = Depends(get_menu_repository),
    cache: MenuListingCache = Depends(get_menu_listing_cache),
) -> MenuItemListEnvelope:
    query = MenuQuery(category=category, tag=tag, available=available, limit=limit, skip=skip)
    return ListMenuItems(repository=repository, cache=cache).execute(query)


@router.get("/{item_id}", response_model=MenuItemEnvelope)
def get_menu_item(
    item_id: str,
    repository: MenuRepository = Depends(get_menu_repository),
) -> MenuItemEnvelope:
    item = GetMenuItem(repository=repository).execute(MenuItemId(item_id))
    return MenuItemEnvelope(message="Menu item fetched successfully", data=item)


@router.post("", response_model=MenuItemEnvelope, status_code=status.HTTP_201_CREATED)
def create_menu_item(
    request_dto: CreateMenuItemRequest,
    repository: MenuRepository = Depends(get_menu_repository),
    cache: MenuListingCache = Depends(get_menu_listing_cache),
) -> MenuItemEnvelope:
    item = CreateMenuItem(repository=repository, cache=cache).execute(request_dto)
    return MenuItemEnvelope(message="Menu item added successfully", data=item)


@router.put("/{item_id}", response_model=MenuItemEnvelope)
def update_menu_item(
    item_id: str,
    request_dto: UpdateMenuItemRequest,
    repository: MenuRepository = Depends(get_menu_repository),
    cache: MenuListingCache = Depends(get_menu_listing_cache),
) -> MenuItemEnvelope:
    item = UpdateMenuItem(repository=repository, cache=cache).execute(
        MenuItemId(item_id),
        request_dto,
    )
    return MenuItemEnvelope(message="Menu item updated successfully", data=item)


@router.delete("/{item_id}", response_model=MessageResponse)
def delete_menu_item(
    item_id: str,
    repository: MenuRepository = Depends(get_menu_repository),
    cache: MenuListingCache = Depends(get_menu_listing_cache),
) -> MessageResponse:
    DeleteMenuItem(repository=repository, cache=cache).execute(MenuItemId(item_id))
    return MessageResponse(message="Menu item deleted successfully")
