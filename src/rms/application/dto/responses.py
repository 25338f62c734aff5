from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class DocumentResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class MenuItemResponse(DocumentResponse):
    id: str = Field(alias="_id")
    name: str
    category: str
    price: float
    ingredients: list[str] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)
    availability: bool
    createdAt: datetime
    updatedAt: datetime


class MessageResponse(BaseModel):
    message: str


class MenuItemEnvelope(MessageResponse):
    data: MenuItemResponse


class MenuItemListEnvelope(MessageResponse):
    data: list[MenuItemResponse] = Field(default_factory=list)


class OrderItemResponse(BaseModel):
    menuItemId: str
    name: str
    priceAtOrder: float
    quantity: int


class OrderResponse(DocumentResponse):
    id: str = Field(alias="_id")
    items: list[OrderItemResponse] = Field(default_factory=list)
    totalAmount: float
    notes: str | None = None
    status: str
    timestamp: datetime
    createdAt: datetime
    updatedAt: datetime | None = None


class OrderEnvelope(MessageResponse):
    data: OrderResponse


class SalesReportRowResponse(DocumentResponse):
    id: str = Field(alias="_id")
    totalSales: float
    count: int


class TopDishResponse(DocumentResponse):
    id: str = Field(alias="_id")
    totalOrdered: int
    menuItemDetails: MenuItemResponse | None = None
