from __future__ import annotations

from datetime import datetime, timedelta, timezone
from decimal import Decimal

from sqlalchemy import Engine, inspect
from sqlalchemy.orm import Session

from qrmenu.infrastructure.db.models.menu import CategoryModel, ProductModel
from qrmenu.infrastructure.db.session import get_engine

_BASE_TIME = datetime(2026, 1, 1, 9, 0, tzinfo=timezone.utc)

CATEGORIES = [
    {"id": 1, "key": "burger", "name": "বার্গার", "icon": "fas fa-hamburger", "sort_order": 1},
    {"id": 2, "key": "pizza", "name": "পিজা", "icon": "fas fa-pizza-slice", "sort_order": 2},
    {"id": 3, "key": "drinks", "name": "পানীয়", "icon": "fas fa-coffee", "sort_order": 3},
    {"id": 4, "key": "dessert", "name": "মিষ্টি", "icon": None, "sort_order": None},
]

PRODUCTS = [
    ("Classic Beef Burger", "250", "burger", "most_selling"),
    ("Chicken Cheese Burger", "220", "burger", "high"),
    ("Margherita Pizza", "450", "pizza", "medium"),
    ("BBQ Chicken Pizza", "550", "pizza", "low"),
    ("Cold Coffee", "120", "drinks", "high"),
    ("Lemon Mint", "80", "drinks", "low"),
    ("Chocolate Brownie", "150", "dessert", "low"),
]


def seed_catalog(engine: Engine) -> int:
    """Upsert the demo categories and products. Returns the number of rows written."""
    with Session(engine) as session:
        for offset, category in enumerate(CATEGORIES):
            session.merge(
                CategoryModel(
                    **category,
                    icon_type="icon",
                    created_at=_BASE_TIME + timedelta(minutes=offset),
                )
            )
        for offset, (name, price, category, priority) in enumerate(PRODUCTS):
            session.merge(
                ProductModel(
                    id=offset + 1,
                    name=name,
                    price=Decimal(price),
                    category=category,
                    priority=priority,
                    image_url=None,
                    created_at=_BASE_TIME + timedelta(hours=offset),
                )
            )
        session.commit()
    return len(CATEGORIES) + len(PRODUCTS)


def main() -> None:
    engine = get_engine(timeout_seconds=2.0)
    required_tables = {"products", "categories", "orders"}
    if not required_tables.issubset(set(inspect(engine).get_table_names())):
        print("no schema yet")
        return

    written = seed_catalog(engine)
    print(f"seed complete ({written} rows)")


if __name__ == "__main__":
    main()
