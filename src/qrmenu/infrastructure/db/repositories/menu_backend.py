from __future__ import annotations

import logging
from datetime import datetime, timezone

from sqlalchemy import Engine, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from qrmenu.application.ports.backend import BackendError, MenuBackend
from qrmenu.domain.common.ids import CategoryKey, MenuItemId, OrderId
from qrmenu.domain.menu.entities import Category, IconType, MenuItem, Priority
from qrmenu.domain.order.entities import OrderRecord
from qrmenu.infrastructure.db.models.menu import CategoryModel, ProductModel
from qrmenu.infrastructure.db.models.order import OrderModel
from qrmenu.infrastructure.db.session import get_engine, ping_database
from qrmenu.infrastructure.supabase.rows import order_to_row

logger = logging.getLogger(__name__)


def _aware(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class SqlAlchemyMenuBackend(MenuBackend):
    def __init__(self, engine: Engine | None = None) -> None:
        self._engine = engine

    @property
    def engine(self) -> Engine:
        if self._engine is None:
            self._engine = get_engine()
        return self._engine

    def fetch_items(self) -> list[MenuItem]:
        statement = select(ProductModel).order_by(ProductModel.id)
        try:
            with Session(self.engine) as session:
                models = list(session.execute(statement).scalars().all())
        except SQLAlchemyError as exc:
            raise BackendError(f"failed to load products: {exc}") from exc

        items: list[MenuItem] = []
        for model in models:
            try:
                items.append(self._item_to_domain(model))
            except (AttributeError, TypeError, ArithmeticError, ValueError):
                logger.warning("menu_item_row_skipped", extra={"row_id": model.id})
        return items

    def fetch_categories(self) -> list[Category]:
        statement = select(CategoryModel).order_by(
            CategoryModel.sort_order.asc().nulls_last(),
            CategoryModel.created_at.asc(),
        )
        try:
            with Session(self.engine) as session:
                models = list(session.execute(statement).scalars().all())
        except SQLAlchemyError as exc:
            raise BackendError(f"failed to load categories: {exc}") from exc

        categories: list[Category] = []
        for model in models:
            try:
                categories.append(self._category_to_domain(model))
            except (AttributeError, TypeError, ValueError):
                logger.warning("category_row_skipped", extra={"row_id": model.id})
        return categories

    def insert_order(self, order: OrderRecord) -> OrderRecord:
        model = self._order_to_model(order)
        try:
            with Session(self.engine) as session:
                session.add(model)
                session.commit()
                order_id = model.id
        except SQLAlchemyError as exc:
            raise BackendError(f"failed to insert order: {exc}") from exc
        return order.with_order_id(OrderId(str(order_id)))

    def ping(self) -> bool:
        try:
            return ping_database(self.engine)
        except RuntimeError:
            return False

    def _item_to_domain(self, model: ProductModel) -> MenuItem:
        return MenuItem(
            item_id=MenuItemId(str(model.id)),
            name=model.name,
            price=model.price,
            category=CategoryKey(model.category.lower()),
            created_at=_aware(model.created_at),
            priority=Priority.parse(model.priority),
            image_url=model.image_url,
        )

    def _category_to_domain(self, model: CategoryModel) -> Category:
        return Category(
            key=CategoryKey(model.key.strip().lower()),
            name=model.name,
            created_at=_aware(model.created_at),
            icon=model.icon,
            icon_type=IconType.parse(model.icon_type),
            sort_order=model.sort_order,
        )

    def _order_to_model(self, order: OrderRecord) -> OrderModel:
        return OrderModel(
            products=order_to_row(order)["products"],
            total_price=order.total_price,
            table_number=order.table_number,
            customer_name=order.customer_name,
            status=order.status.value,
            created_at=order.created_at,
        )
