"""Shared Pydantic models for invoicekit."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field

# ── Page geometry ──


class PageSize(BaseModel):
    """Page dimensions in points (1/72 inch)."""

    model_config = ConfigDict(frozen=True)

    width: float = Field(ge=0)
    height: float = Field(ge=0)

    @property
    def area(self) -> float:
        return self.width * self.height


LETTER = PageSize(width=612, height=792)
LEGAL = PageSize(width=612, height=1008)
A4 = PageSize(width=595, height=842)
TABLOID = PageSize(width=792, height=1224)


# ── Documents ──


@runtime_checkable
class PagedDocument(Protocol):
    """Anything the cache can hold: a page count and a first page."""

    @property
    def page_count(self) -> int: ...

    @property
    def first_page(self) -> PageSize | None: ...


class RenderedDocument(BaseModel):
    """Immutable output of the rendering pipeline for one invoice snapshot."""

    model_config = ConfigDict(frozen=True)

    pages: tuple[PageSize, ...] = ()
    data: bytes = b""

    @property
    def page_count(self) -> int:
        return len(self.pages)

    @property
    def first_page(self) -> PageSize | None:
        return self.pages[0] if self.pages else None

    @classmethod
    def uniform(cls, page_count: int, page: PageSize = LETTER, data: bytes = b"") -> RenderedDocument:
        """Build a document whose pages all share one size."""
        return cls(pages=(page,) * page_count, data=data)
