from __future__ import annotations

from dataclasses import dataclass

DEFAULT_MAX_TABLES = 20


def parse_table_number(raw: str | int | None, max_tables: int) -> int | None:
    """Parse a table number, returning None unless it is an integer in [1, max_tables]."""
    if raw is None:
        return None
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        value = raw
    else:
        text = raw.strip()
        if not text:
            return None
        try:
            value = int(text)
        except ValueError:
            return None
    if 1 <= value <= max_tables:
        return value
    return None


@dataclass(frozen=True)
class TableContext:
    """Table information captured once when the menu page is opened."""

    max_tables: int = DEFAULT_MAX_TABLES
    auto_detected: int | None = None

    def __post_init__(self) -> None:
        if self.max_tables < 1:
            raise ValueError("max_tables must be >= 1")
        if self.auto_detected is not None and not 1 <= self.auto_detected <= self.max_tables:
            raise ValueError("auto_detected table must be within [1, max_tables]")

    @property
    def shows_table_selector(self) -> bool:
        return self.auto_detected is None

    @property
    def table_choices(self) -> list[int]:
        if self.auto_detected is not None:
            return []
        return list(range(1, self.max_tables + 1))
