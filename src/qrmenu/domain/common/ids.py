from __future__ import annotations

from typing import NewType

MenuItemId = NewType("MenuItemId", str)
CategoryKey = NewType("CategoryKey", str)
OrderId = NewType("OrderId", str)
SessionId = NewType("SessionId", str)
