from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


def _to_camel(value: str) -> str:
    parts = value.split("_")
    return parts[0] + "".join(part.capitalize() for part in parts[1:])


class CamelBaseModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=_to_camel,
        populate_by_name=True,
        allow_inf_nan=False,
    )


class CreateMenuItemRequest(CamelBaseModel):
    name: str | None = None
    category: str | None = None
    price: float | None = None
    ingredients: list[str] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)
    availability: bool | None = None


class UpdateMenuItemRequest(CamelBaseModel):
    name: str | None = None
    category: str | None = None
    price: float | None = None
    ingredients: list[str] | None = None
    tags: list[str] | None = None
    availability: bool | None = None


class PlaceOrderItemRequest(CamelBaseModel):
    menu_item_id: str
    name: str
    price_at_order: float
    quantity: int


class PlaceOrderRequest(CamelBaseModel):
    items: list[PlaceOrderItemRequest] = Field(default_factory=list)
    total_amount: float | None = None
    notes: str | None = None
    status: str | None = None


class UpdateOrderStatusRequest(CamelBaseModel):
    status: str | None = None
