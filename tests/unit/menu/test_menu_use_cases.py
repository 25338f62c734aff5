from __future__ import annotations

import sys
from dataclasses import replace
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[3] / "src"))

from rms.application.dto.requests import CreateMenuItemRequest, UpdateMenuItemRequest
from rms.application.ports.repositories import InvalidIdentifierError, MenuQuery
from rms.application.use_cases.create_menu_item import CreateMenuItem
from rms.application.use_cases.delete_menu_item import DeleteMenuItem
from rms.application.use_cases.errors import (
    InvalidMenuItemIdError,
    InvalidMenuQueryError,
    MenuItemNotFoundError,
    MenuItemValidationError,
)
from rms.application.use_cases.get_menu_item import GetMenuItem
from rms.application.use_cases.list_menu_items import ListMenuItems
from rms.application.use_cases.menu_cache import CATALOG_VERSION_CACHE_KEY, MenuListingCache
from rms.application.use_cases.update_menu_item import UpdateMenuItem
from rms.domain.common.ids import MenuItemId
from rms.domain.menu.entities import MenuItem


class FakeMenuRepository:
    def __init__(self) -> None:
        self.items: dict[str, MenuItem] = {}
        self.list_calls = 0
        self.last_changes: dict[str, Any] | None = None

    def _check(self, item_id: MenuItemId) -> None:
        if not str(item_id).startswith("itm_"):
            raise InvalidIdentifierError(f"invalid identifier: {item_id!r}")

    def add(self, item: MenuItem) -> MenuItem:
        stored = replace(item, item_id=MenuItemId(f"itm_{len(self.items) + 1:03d}"))
        self.items[str(stored.item_id)] = stored
        return stored

    def get(self, item_id: MenuItemId) -> MenuItem | None:
        self._check(item_id)
        return self.items.get(str(item_id))

    def list_items(self, query: MenuQuery) -> list[MenuItem]:
        self.list_calls += 1
        return list(self.items.values())

    def update(
        self,
        item_id: MenuItemId,
        changes: dict[str, Any],
        updated_at: datetime,
    ) -> MenuItem | None:
        self._check(item_id)
        self.last_changes = changes
        current = self.items.get(str(item_id))
        if current is None:
            return None
        updated = replace(current, **changes, updated_at=updated_at)
        self.items[str(item_id)] = updated
        return updated

    def delete(self, item_id: MenuItemId) -> bool:
        self._check(item_id)
        return self.items.pop(str(item_id), None) is not None


class FakeCacheStore:
    def __init__(self) -> None:
        self.values: dict[str, str] = {}

    def get(self, key: str) -> str | None:
        return self.values.get(key)

    def set(self, key: str, value: str, ttl_seconds: int) -> None:
        self.values[key] = value

    def incr(self, key: str) -> int:
        value = int(self.values.get(key, "0")) + 1
        self.values[key] = str(value)
        return value


class BrokenCacheStore:
    def get(self, key: str) -> str | None:
        raise ConnectionError("cache down")

    def set(self, key: str, value: str, ttl_seconds: int) -> None:
        raise ConnectionError("cache down")

    def incr(self, key: str) -> int:
        raise ConnectionError("cache down")


CREATED_AT = datetime(2024, 5, 1, 9, 30, tzinfo=timezone.utc)


def _seed(repository: FakeMenuRepository, name: str = "Paneer Tikka") -> MenuItem:
    return repository.add(
        MenuItem(
            item_id=None,
            name=name,
            category="Starters",
            price=249.0,
            tags=["vegetarian"],
            created_at=CREATED_AT,
            updated_at=CREATED_AT,
        )
    )


def test_create_menu_item_persists_and_bumps_catalog_version() -> None:
    repository = FakeMenuRepository()
    store = FakeCacheStore()

    response = CreateMenuItem(repository=repository, cache=MenuListingCache(store)).execute(
        CreateMenuItemRequest(name="Dal Makhani", category="Mains", price=289, tags=["veg", "veg"])
    )

    assert response.id == "itm_001"
    assert response.tags == ["veg"]
    assert response.availability is True
    assert response.createdAt == response.updatedAt
    assert store.values[CATALOG_VERSION_CACHE_KEY] == "1"


def test_create_menu_item_without_price_persists_nothing() -> None:
    repository = FakeMenuRepository()
    store = FakeCacheStore()

    with pytest.raises(MenuItemValidationError, match="Missing required fields: name, price, category"):
        CreateMenuItem(repository=repository, cache=MenuListingCache(store)).execute(
            CreateMenuItemRequest(name="Dal Makhani", category="Mains")
        )

    assert repository.items == {}
    assert CATALOG_VERSION_CACHE_KEY not in store.values


def test_list_menu_items_populates_cache_on_miss_and_reads_it_when_warm() -> None:
    repository = FakeMenuRepository()
    _seed(repository)
    cache = MenuListingCache(FakeCacheStore())
    use_case = ListMenuItems(repository=repository, cache=cache)

    first = use_case.execute(MenuQuery())
    second = use_case.execute(MenuQuery())

    assert repository.list_calls == 1
    assert first.message == "Menu items fetched successfully"
    assert [item.name for item in second.data] == ["Paneer Tikka"]
    assert second.data[0].id == first.data[0].id


def test_catalog_write_makes_cached_listing_stale() -> None:
    repository = FakeMenuRepository()
    _seed(repository)
    cache = MenuListingCache(FakeCacheStore())
    list_items = ListMenuItems(repository=repository, cache=cache)
    list_items.execute(MenuQuery())

    CreateMenuItem(repository=repository, cache=cache).execute(
        CreateMenuItemRequest(name="Gulab Jamun", category="Desserts", price=129)
    )
    listing = list_items.execute(MenuQuery())

    assert repository.list_calls == 2
    assert [item.name for item in listing.data] == ["Paneer Tikka", "Gulab Jamun"]


def test_list_menu_items_falls_through_when_cache_is_down() -> None:
    repository = FakeMenuRepository()
    _seed(repository)
    use_case = ListMenuItems(repository=repository, cache=MenuListingCache(BrokenCacheStore()))

    assert len(use_case.execute(MenuQuery()).data) == 1
    assert len(use_case.execute(MenuQuery()).data) == 1
    assert repository.list_calls == 2


@pytest.mark.parametrize("query", [MenuQuery(limit=0), MenuQuery(limit=501), MenuQuery(skip=-1)])
def test_list_menu_items_rejects_out_of_range_paging(query: MenuQuery) -> None:
    use_case = ListMenuItems(repository=FakeMenuRepository(), cache=MenuListingCache(FakeCacheStore()))

    with pytest.raises(InvalidMenuQueryError):
        use_case.execute(query)


def test_get_menu_item_distinguishes_malformed_and_missing_ids() -> None:
    repository = FakeMenuRepository()
    item = _seed(repository)
    use_case = GetMenuItem(repository=repository)

    assert use_case.execute(item.item_id).name == "Paneer Tikka"
    with pytest.raises(InvalidMenuItemIdError, match="Invalid menu item ID format."):
        use_case.execute(MenuItemId("not-an-id"))
    with pytest.raises(MenuItemNotFoundError, match="Menu item not found"):
        use_case.execute(MenuItemId("itm_999"))


def test_update_menu_item_ignores_identifier_in_payload() -> None:
    repository = FakeMenuRepository()
    item = _seed(repository)
    request_dto = UpdateMenuItemRequest.model_validate(
        {"_id": "itm_777", "createdAt": "2020-01-01T00:00:00Z", "price": 275}
    )

    response = UpdateMenuItem(repository=repository, cache=MenuListingCache(FakeCacheStore())).execute(
        item.item_id,
        request_dto,
    )

    assert repository.last_changes == {"price": 275.0}
    assert response.id == item.item_id
    assert response.price == 275.0
    assert response.createdAt == CREATED_AT
    assert response.updatedAt > CREATED_AT


def test_update_menu_item_with_empty_patch_only_stamps_updated_at() -> None:
    repository = FakeMenuRepository()
    item = _seed(repository)

    response = UpdateMenuItem(repository=repository, cache=MenuListingCache(FakeCacheStore())).execute(
        item.item_id,
        UpdateMenuItemRequest(),
    )

    assert repository.last_changes == {}
    assert response.name == "Paneer Tikka"
    assert response.updatedAt > CREATED_AT


def test_update_menu_item_rejects_invalid_price() -> None:
    repository = FakeMenuRepository()
    item = _seed(repository)

    with pytest.raises(MenuItemValidationError):
        UpdateMenuItem(repository=repository, cache=MenuListingCache(FakeCacheStore())).execute(
            item.item_id,
            UpdateMenuItemRequest(price=-5),
        )

    assert repository.items[str(item.item_id)].price == 249.0


def test_update_missing_menu_item_raises_not_found() -> None:
    with pytest.raises(MenuItemNotFoundError, match="Menu item not found for update"):
        UpdateMenuItem(
            repository=FakeMenuRepository(),
            cache=MenuListingCache(FakeCacheStore()),
        ).execute(MenuItemId("itm_404"), UpdateMenuItemRequest(name="Ghost"))


def test_delete_missing_menu_item_leaves_catalog_unchanged() -> None:
    repository = FakeMenuRepository()
    _seed(repository)
    store = FakeCacheStore()

    with pytest.raises(MenuItemNotFoundError, match="Menu item not found for deletion"):
        DeleteMenuItem(repository=repository, cache=MenuListingCache(store)).execute(
            MenuItemId("itm_404")
        )

    assert len(repository.items) == 1
    assert CATALOG_VERSION_CACHE_KEY not in store.values


def test_delete_menu_item_removes_it_and_bumps_catalog_version() -> None:
    repository = FakeMenuRepository()
    item = _seed(repository)
    store = FakeCacheStore()

    DeleteMenuItem(repository=repository, cache=MenuListingCache(store)).execute(item.item_id)

    assert repository.items == {}
    assert store.values[CATALOG_VERSION_CACHE_KEY] == "1"
