from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field


class NoticeResponse(BaseModel):
    code: str
    message: str
    autoDismissSeconds: int | None = None


class IconResponse(BaseModel):
    type: str
    value: str


class CategoryResponse(BaseModel):
    key: str
    name: str
    icon: IconResponse


class BadgeResponse(BaseModel):
    label: str
    icon: str


class MenuItemResponse(BaseModel):
    itemId: str
    name: str
    price: float
    category: str
    categoryName: str
    priority: str
    badge: BadgeResponse | None = None
    imageUrl: str
    hasImage: bool
    createdAt: datetime


class MenuViewResponse(BaseModel):
    activeCategory: str
    search: str | None = None
    categories: list[CategoryResponse] = Field(default_factory=list)
    categorySource: str
    items: list[MenuItemResponse] = Field(default_factory=list)
    emptyState: bool
    notice: NoticeResponse | None = None


class CartLineResponse(BaseModel):
    itemId: str
    name: str
    price: float
    quantity: int
    lineTotal: float
    imageUrl: str


class CartResponse(BaseModel):
    lines: list[CartLineResponse] = Field(default_factory=list)
    total: float
    itemCount: int
    lineCount: int
    showOrderButton: bool


class TableContextResponse(BaseModel):
    autoDetected: int | None = None
    showTableSelector: bool
    choices: list[int] = Field(default_factory=list)
    maxTables: int


class SessionResponse(BaseModel):
    sessionId: str
    revision: int
    table: TableContextResponse
    view: MenuViewResponse
    cart: CartResponse


class OrderLineResponse(BaseModel):
    itemId: str
    name: str
    price: float
    quantity: int
    lineTotal: float


class OrderResponse(BaseModel):
    orderId: str | None = None
    lines: list[OrderLineResponse] = Field(default_factory=list)
    totalPrice: float
    tableNumber: int
    customerName: str | None = None
    status: str
    createdAt: datetime


class OrderPlacedResponse(BaseModel):
    order: OrderResponse
    cart: CartResponse
    notice: NoticeResponse


class CatalogRefreshResponse(BaseModel):
    itemCount: int
    categoryCount: int
    categorySource: str
    loadedAt: datetime
    notice: NoticeResponse | None = None
