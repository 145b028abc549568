from __future__ import annotations

import logging

from qrmenu.application.session.registry import SessionRegistry
from qrmenu.application.session.state import OrderingSession
from qrmenu.domain.menu.catalog import CatalogStore
from qrmenu.domain.table.entities import TableContext, parse_table_number

logger = logging.getLogger(__name__)


def detect_table_number(table_param: str | None, max_tables: int) -> int | None:
    if table_param is None:
        return None
    table_number = parse_table_number(table_param, max_tables)
    if table_number is None:
        logger.warning(
            "invalid_table_parameter",
            extra={"table_param": table_param, "max_tables": max_tables},
        )
        return None
    logger.info("table_auto_detected", extra={"table_number": table_number})
    return table_number


class OpenSession:
    def __init__(self, registry: SessionRegistry, catalog: CatalogStore, max_tables: int) -> None:
        self._registry = registry
        self._catalog = catalog
        self._max_tables = max_tables

    def execute(self, table_param: str | None = None) -> OrderingSession:
        table = TableContext(
            max_tables=self._max_tables,
            auto_detected=detect_table_number(table_param, self._max_tables),
        )
        session = self._registry.open(catalog=self._catalog, table=table)
        logger.info(
            "session_opened",
            extra={"session_id": str(session.session_id), "table_number": table.auto_detected},
        )
        return session
