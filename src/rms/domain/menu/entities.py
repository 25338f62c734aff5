from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Iterable

from rms.domain.common.ids import MenuItemId

REQUIRED_FIELDS = ("name", "price", "category")
EDITABLE_FIELDS = frozenset({"name", "category", "price", "ingredients", "tags", "availability"})


class InvalidMenuItemError(ValueError):
    pass


class MissingMenuItemFieldsError(InvalidMenuItemError):
    def __init__(self, missing: list[str]) -> None:
        self.missing = missing
        super().__init__(f"Missing required fields: {', '.join(REQUIRED_FIELDS)}")


def normalize_ingredients(values: Iterable[str] | None) -> list[str]:
    if values is None:
        return []
    return [value.strip() for value in values if value and value.strip()]


def normalize_tags(values: Iterable[str] | None) -> list[str]:
    # tags behave as a set but keep first-seen order for display
    seen: dict[str, None] = {}
    for value in normalize_ingredients(values):
        seen.setdefault(value, None)
    return list(seen)


def _check_name(field_name: str, value: Any) -> str:
    if not isinstance(value, str) or not value.strip():
        raise InvalidMenuItemError(f"{field_name} must be a non-empty string")
    return value.strip()


def _check_price(value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidMenuItemError("price must be a number")
    if not math.isfinite(value):
        raise InvalidMenuItemError("price must be a finite number")
    if value <= 0:
        raise InvalidMenuItemError("price must be greater than 0")
    return float(value)


@dataclass(frozen=True)
class MenuItem:
    item_id: MenuItemId | None
    name: str
    category: str
    price: float
    ingredients: list[str] = field(default_factory=list)
    tags: list[str] = field(default_factory=list)
    availability: bool = True
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __post_init__(self) -> None:
        _check_name("name", self.name)
        _check_name("category", self.category)
        _check_price(self.price)


def create_menu_item(
    *,
    name: str | None,
    category: str | None,
    price: float | None,
    ingredients: Iterable[str] | None,
    tags: Iterable[str] | None,
    availability: bool | None,
    now: datetime,
) -> MenuItem:
    provided = {"name": name, "price": price, "category": category}
    missing = [key for key in REQUIRED_FIELDS if provided[key] in (None, "")]
    if missing:
        raise MissingMenuItemFieldsError(missing)

    return MenuItem(
        item_id=None,
        name=_check_name("name", name),
        category=_check_name("category", category),
        price=_check_price(price),
        ingredients=normalize_ingredients(ingredients),
        tags=normalize_tags(tags),
        availability=True if availability is None else availability,
        created_at=now,
        updated_at=now,
    )


def validate_menu_item_changes(changes: dict[str, Any]) -> dict[str, Any]:
    """Normalize a partial update.

    Unknown keys (including identifiers and server-set timestamps) are
    dropped. Required fields may be replaced but never cleared.
    """
    cleaned: dict[str, Any] = {}
    for key, value in changes.items():
        if key not in EDITABLE_FIELDS:
            continue
        if key in ("name", "category"):
            cleaned[key] = _check_name(key, value)
        elif key == "price":
            cleaned[key] = _check_price(value)
        elif key == "ingredients":
            cleaned[key] = normalize_ingredients(value)
        elif key == "tags":
            cleaned[key] = normalize_tags(value)
        elif key == "availability":
            if not isinstance(value, bool):
                raise InvalidMenuItemError("availability must be a boolean")
            cleaned[key] = value
    return cleaned
