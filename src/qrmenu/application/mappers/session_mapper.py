from __future__ import annotations

from collections.abc import Mapping

from qrmenu.application import notices
from qrmenu.application.display import image_or_placeholder
from qrmenu.application.dto.responses import (
    CartLineResponse,
    CartResponse,
    NoticeResponse,
    SessionResponse,
    TableContextResponse,
)
from qrmenu.application.mappers.catalog_mapper import to_menu_view_response
from qrmenu.application.session.state import OrderingSession
from qrmenu.domain.cart.selection import SelectionCart
from qrmenu.domain.menu.catalog import CatalogSnapshot
from qrmenu.domain.menu.category_index import CategoryDisplay
from qrmenu.domain.table.entities import TableContext


def catalog_notice(snapshot: CatalogSnapshot) -> NoticeResponse | None:
    if snapshot.load_error is None:
        return None
    return NoticeResponse(
        code=snapshot.load_error,
        message=notices.CATALOG_LOAD_FAILED,
        autoDismissSeconds=notices.NOTICE_AUTO_DISMISS_SECONDS,
    )


def to_cart_response(cart: SelectionCart) -> CartResponse:
    return CartResponse(
        lines=[
            CartLineResponse(
                itemId=str(line.item_id),
                name=line.item.name,
                price=float(line.item.price),
                quantity=line.quantity,
                lineTotal=float(line.line_total),
                imageUrl=image_or_placeholder(line.item.image_url),
            )
            for line in cart.lines
        ],
        total=float(cart.total()),
        itemCount=cart.item_count(),
        lineCount=cart.line_count(),
        showOrderButton=not cart.is_empty(),
    )


def to_table_context_response(table: TableContext) -> TableContextResponse:
    return TableContextResponse(
        autoDetected=table.auto_detected,
        showTableSelector=table.shows_table_selector,
        choices=table.table_choices,
        maxTables=table.max_tables,
    )


def to_session_response(
    session: OrderingSession,
    display: Mapping[str, CategoryDisplay],
) -> SessionResponse:
    snapshot = session.catalog.snapshot
    return SessionResponse(
        sessionId=str(session.session_id),
        revision=session.revision,
        table=to_table_context_response(session.table),
        view=to_menu_view_response(
            snapshot=snapshot,
            visible_items=session.visible_items(),
            active_category=session.active_category,
            search=session.search,
            display=display,
            notice=catalog_notice(snapshot),
        ),
        cart=to_cart_response(session.cart),
    )
