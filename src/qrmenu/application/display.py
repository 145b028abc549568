from __future__ import annotations

import base64
import json
from dataclasses import dataclass
from pathlib import Path

from qrmenu.domain.menu.category_index import GENERIC_ICON, CategoryDisplay
from qrmenu.domain.menu.entities import Priority

DEFAULT_CATEGORY_DISPLAY: dict[str, CategoryDisplay] = {
    "drinks": CategoryDisplay(name="পানীয়", icon="fas fa-coffee"),
    "burger": CategoryDisplay(name="বার্গার", icon="fas fa-hamburger"),
    "pizza": CategoryDisplay(name="পিজা", icon="fas fa-pizza-slice"),
    "rice": CategoryDisplay(name="ভাত", icon="fas fa-bowl-rice"),
    "chicken": CategoryDisplay(name="চিকেন", icon="fas fa-drumstick-bite"),
    "beef": CategoryDisplay(name="গরুর মাংস", icon="fas fa-hamburger"),
    "fish": CategoryDisplay(name="মাছ", icon="fas fa-fish"),
    "vegetable": CategoryDisplay(name="সবজি", icon="fas fa-carrot"),
    "dessert": CategoryDisplay(name="মিষ্টি", icon="fas fa-ice-cream"),
    "snacks": CategoryDisplay(name="নাস্তা", icon="fas fa-cookie-bite"),
    "noodles": CategoryDisplay(name="নুডলস", icon="fas fa-utensils"),
}


@dataclass(frozen=True)
class PriorityBadge:
    label: str
    icon: str


PRIORITY_BADGES: dict[Priority, PriorityBadge] = {
    Priority.MOST_SELLING: PriorityBadge(label="Top Selling", icon="fas fa-fire"),
    Priority.HIGH: PriorityBadge(label="Popular", icon="fas fa-star"),
}

_PLACEHOLDER_SVG = (
    '<svg width="300" height="200" viewBox="0 0 300 200" fill="none" '
    'xmlns="http://www.w3.org/2000/svg">'
    '<rect width="300" height="200" fill="#F3F4F6"/>'
    '<rect x="125" y="75" width="50" height="50" fill="#9B9B9B" rx="4"/>'
    '<rect x="140" y="90" width="20" height="20" fill="white" rx="2"/>'
    '<text x="150" y="145" text-anchor="middle" fill="#6B7280" '
    'font-family="Arial" font-size="14">No Image</text>'
    "</svg>"
)
PLACEHOLDER_IMAGE = "data:image/svg+xml;base64," + base64.b64encode(
    _PLACEHOLDER_SVG.encode("utf-8")
).decode("ascii")


def image_or_placeholder(image_url: str | None) -> str:
    return image_url or PLACEHOLDER_IMAGE


def load_category_display(path: Path | None = None) -> dict[str, CategoryDisplay]:
    """Default display table, extended or overridden by a JSON file.

    The file maps category keys to ``{"name": ..., "icon": ...}``.
    """
    table = dict(DEFAULT_CATEGORY_DISPLAY)
    if path is None:
        return table

    raw = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(raw, dict):
        raise ValueError(f"category display file must contain an object: {path}")
    for key, value in raw.items():
        if not isinstance(value, dict) or not value.get("name"):
            raise ValueError(f"invalid category display entry for {key!r}")
        table[key.lower()] = CategoryDisplay(
            name=str(value["name"]),
            icon=str(value.get("icon") or GENERIC_ICON),
        )
    return table
