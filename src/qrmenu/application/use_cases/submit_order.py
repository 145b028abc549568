from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime, timezone

from opentelemetry import trace

from qrmenu.application import notices
from qrmenu.application.dto.requests import SubmitOrderRequest
from qrmenu.application.metrics.ordering import (
    record_order_submitted,
    record_submission_failure,
)
from qrmenu.application.ports.backend import BackendError, MenuBackend
from qrmenu.application.session.state import OrderingSession, SubmissionInProgressError
from qrmenu.domain.order.entities import OrderLineSnapshot, OrderRecord, create_pending_order
from qrmenu.domain.table.entities import TableContext, parse_table_number

logger = logging.getLogger(__name__)
tracer = trace.get_tracer(__name__)


class OrderError(Exception):
    details: dict[str, object] | None = None


class EmptyCartError(OrderError):
    pass


class MissingTableNumberError(OrderError):
    details = notices.transient(notices.MISSING_TABLE_NUMBER)


class InvalidTableNumberError(OrderError):
    details = notices.transient(notices.MISSING_TABLE_NUMBER)


class SubmissionFailedError(OrderError):
    details = notices.transient(notices.SUBMISSION_FAILED)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _resolve_table_number(table: TableContext, manual_value: int | None) -> int:
    if table.auto_detected is not None:
        return table.auto_detected
    if manual_value is None:
        raise MissingTableNumberError("a table number is required")
    table_number = parse_table_number(manual_value, table.max_tables)
    if table_number is None:
        raise InvalidTableNumberError(
            f"table number must be between 1 and {table.max_tables}, got {manual_value}"
        )
    return table_number


def _customer_name(raw: str | None) -> str | None:
    if raw is None:
        return None
    return raw.strip() or None


class SubmitOrder:
    def __init__(
        self,
        backend: MenuBackend,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._backend = backend
        self._clock = clock

    def execute(
        self,
        session: OrderingSession,
        request_dto: SubmitOrderRequest,
    ) -> OrderRecord:
        with tracer.start_as_current_span("submit_order") as span:
            span.set_attribute("qrmenu.session_id", str(session.session_id))
            span.set_attribute("qrmenu.cart.lines", session.cart.line_count())
            try:
                with session.submission():
                    return self._submit(session, request_dto)
            except SubmissionInProgressError:
                record_submission_failure("in_progress")
                raise

    def _submit(
        self,
        session: OrderingSession,
        request_dto: SubmitOrderRequest,
    ) -> OrderRecord:
        cart = session.cart
        if cart.is_empty():
            record_submission_failure("empty_cart")
            raise EmptyCartError("cart is empty")

        try:
            table_number = _resolve_table_number(session.table, request_dto.table_number)
        except OrderError:
            record_submission_failure("table_number")
            raise

        lines = [OrderLineSnapshot.from_cart_line(line) for line in cart.lines]
        order = create_pending_order(
            lines=lines,
            table_number=table_number,
            customer_name=_customer_name(request_dto.customer_name),
            now=self._clock(),
        )
        if order.total_price != cart.total():
            raise RuntimeError("order total does not match cart total")

        log_extra = {
            "session_id": str(session.session_id),
            "table_number": table_number,
        }
        try:
            persisted = self._backend.insert_order(order)
        except BackendError as exc:
            record_submission_failure("backend")
            logger.exception("order_submission_failed", extra=log_extra)
            raise SubmissionFailedError(f"order could not be saved: {exc}") from exc

        cart.clear()
        record_order_submitted(persisted)
        logger.info(
            "order_placed",
            extra={**log_extra, "order_id": str(persisted.order_id)},
        )
        return persisted
