from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


def _to_camel(value: str) -> str:
    parts = value.split("_")
    return parts[0] + "".join(part.capitalize() for part in parts[1:])


class CamelBaseModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=_to_camel,
        populate_by_name=True,
    )


class UpdateViewRequest(CamelBaseModel):
    category: str = Field(default="all", min_length=1, max_length=50)
    search: str | None = Field(default=None, max_length=100)


class ChangeQuantityRequest(CamelBaseModel):
    delta: Literal[1, -1]


class SubmitOrderRequest(CamelBaseModel):
    customer_name: str | None = Field(default=None, max_length=100)
    table_number: int | None = None
