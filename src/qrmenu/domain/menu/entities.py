from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any

from qrmenu.domain.common.ids import CategoryKey, MenuItemId


class Priority(str, Enum):
    MOST_SELLING = "most_selling"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @classmethod
    def parse(cls, value: Any) -> Priority:
        if not isinstance(value, str):
            return cls.LOW
        try:
            return cls(value.strip().lower())
        except ValueError:
            return cls.LOW


class IconType(str, Enum):
    ICON = "icon"
    IMAGE = "image"

    @classmethod
    def parse(cls, value: Any) -> IconType:
        if isinstance(value, str) and value.strip().lower() == cls.IMAGE.value:
            return cls.IMAGE
        return cls.ICON


@dataclass(frozen=True)
class MenuItem:
    item_id: MenuItemId
    name: str
    price: Decimal
    category: CategoryKey
    created_at: datetime
    priority: Priority = Priority.LOW
    image_url: str | None = None

    def __post_init__(self) -> None:
        if not self.name.strip():
            raise ValueError("name must be non-empty")
        if not self.price.is_finite() or self.price < 0:
            raise ValueError("price must be a finite amount >= 0")
        if self.category != self.category.lower():
            raise ValueError("category must be lowercase")


@dataclass(frozen=True)
class Category:
    key: CategoryKey
    name: str | None
    created_at: datetime
    icon: str | None = None
    icon_type: IconType = IconType.ICON
    sort_order: int | None = None

    def __post_init__(self) -> None:
        if not self.key.strip():
            raise ValueError("key must be non-empty")
        if self.key != self.key.lower():
            raise ValueError("key must be lowercase")


@dataclass(frozen=True)
class IconRef:
    kind: IconType
    value: str


@dataclass(frozen=True)
class CategoryEntry:
    key: CategoryKey
    name: str
    icon: IconRef
