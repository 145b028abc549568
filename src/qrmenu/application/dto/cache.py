from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field


class CachedMenuItem(BaseModel):
    item_id: str
    name: str
    price: Decimal
    category: str
    priority: str
    image_url: str | None = None
    created_at: datetime


class CachedCategory(BaseModel):
    key: str
    name: str | None = None
    icon: str | None = None
    icon_type: str = "icon"
    sort_order: int | None = None
    created_at: datetime


class CachedCatalog(BaseModel):
    items: list[CachedMenuItem] = Field(default_factory=list)
    categories: list[CachedCategory] = Field(default_factory=list)
