"""Query-string schema for paginated record lists."""

from __future__ import annotations

from typing import Literal

from pydantic import Field

from .base import CamelModel

# Keeps (page - 1) * pageSize inside a 64-bit SQL OFFSET.
MAX_PAGE = 10_000_000


class ListQuery(CamelModel):
    search: str | None = None
    page: int = Field(default=1, ge=1, le=MAX_PAGE)
    page_size: int = Field(default=25, ge=1, le=100)
    sort: Literal["createdAt", "updatedAt"] | None = None
    direction: Literal["asc", "desc"] = "desc"

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.page_size

    @property
    def search_term(self) -> str | None:
        term = (self.search or "").strip()
        return term or None
