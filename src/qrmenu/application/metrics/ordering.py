from __future__ import annotations

from prometheus_client import Counter, Gauge, Histogram

from qrmenu.domain.order.entities import OrderRecord

CATALOG_LOADS_TOTAL = Counter(
    "qrmenu_catalog_loads_total",
    "Catalog loads by source.",
    ["source"],
)

CATALOG_ITEMS = Gauge(
    "qrmenu_catalog_items",
    "Number of menu items in the loaded catalog.",
)

CATEGORY_FALLBACK_TOTAL = Counter(
    "qrmenu_category_fallback_total",
    "Category index builds that fell back to item-derived categories.",
    ["reason"],
)

ORDERS_SUBMITTED_TOTAL = Counter(
    "qrmenu_orders_submitted_total",
    "Orders persisted by status.",
    ["status"],
)

ORDER_SUBMISSION_FAILURES_TOTAL = Counter(
    "qrmenu_order_submission_failures_total",
    "Order submissions that did not reach the backend or were rejected.",
    ["reason"],
)

ORDER_ITEM_COUNT = Histogram(
    "qrmenu_order_item_count",
    "Total quantity of items per submitted order.",
    buckets=(1, 2, 3, 5, 8, 13, 21),
)

ACTIVE_SESSIONS = Gauge(
    "qrmenu_active_sessions",
    "Ordering sessions currently held in memory.",
)


def record_catalog_load(source: str, item_count: int) -> None:
    CATALOG_LOADS_TOTAL.labels(source=source).inc()
    CATALOG_ITEMS.set(item_count)


def record_category_fallback(reason: str) -> None:
    CATEGORY_FALLBACK_TOTAL.labels(reason=reason).inc()


def record_order_submitted(order: OrderRecord) -> None:
    ORDERS_SUBMITTED_TOTAL.labels(status=order.status.value).inc()
    ORDER_ITEM_COUNT.observe(sum(line.quantity for line in order.lines))


def record_submission_failure(reason: str) -> None:
    ORDER_SUBMISSION_FAILURES_TOTAL.labels(reason=reason).inc()


def record_active_sessions(count: int) -> None:
    ACTIVE_SESSIONS.set(count)
