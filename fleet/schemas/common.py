"""Common schema module."""

from __future__ import annotations

from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

ItemT = TypeVar("ItemT")


class CamelModel(BaseModel):
    """Base model serialising field names as camelCase on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class LinkDto(CamelModel):
    model_config = ConfigDict(frozen=True)

    href: str = ""
    rel: str
    method: str = "GET"


class ResourceResponse(CamelModel):
    links: list[LinkDto] = Field(default_factory=list)


class PagedResponse(CamelModel, Generic[ItemT]):
    items: list[ItemT]
    current_page: int
    page_size: int
    total_items: int
    total_pages: int
    has_previous: bool
    has_next: bool
    links: list[LinkDto] = Field(default_factory=list)


class ErrorEnvelope(CamelModel):
    status: str = "error"
    error_code: str
    detail: Any
