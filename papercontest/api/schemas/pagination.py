"""Pagination request parameters and the paginated response wrapper.

List endpoints accept ``page`` and ``pageSize`` query parameters and answer
with::

    {"items": [...], "total": 25, "page": 3, "pageSize": 10, "totalPages": 3}

``PaginationParams`` only declares the bounds; FastAPI enforces them while
parsing the query string, so handlers never see an out-of-range value.
"""

import math
from collections.abc import Iterable
from typing import Annotated, Generic, Self, TypeVar

from fastapi import Depends, Query
from pydantic import BaseModel, ConfigDict, Field, computed_field
from pydantic.alias_generators import to_camel

from papercontest.core.constants import DEFAULT_PAGE, DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE

T = TypeVar("T")


class PaginationParams(BaseModel):
    """Validated page selection for a list query."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    page: int = Field(
        default=DEFAULT_PAGE,
        ge=1,
        description="Page number, starting at 1",
        examples=[1],
    )
    page_size: int = Field(
        default=DEFAULT_PAGE_SIZE,
        ge=1,
        le=MAX_PAGE_SIZE,
        description="Number of items per page",
        examples=[10],
    )

    @property
    def offset(self) -> int:
        """Number of rows to skip before the first item of this page."""
        return (self.page - 1) * self.page_size

    @property
    def limit(self) -> int:
        """Maximum number of rows on this page."""
        return self.page_size


def pagination_params(
    page: Annotated[
        int, Query(ge=1, description="Page number, starting at 1")
    ] = DEFAULT_PAGE,
    page_size: Annotated[
        int,
        Query(
            alias="pageSize",
            ge=1,
            le=MAX_PAGE_SIZE,
            description="Number of items per page",
        ),
    ] = DEFAULT_PAGE_SIZE,
) -> PaginationParams:
    """Read ``page`` and ``pageSize`` from the query string.

    Args:
        page: Requested page, defaults to 1.
        page_size: Requested page size, defaults to 10, at most 100.

    Returns:
        PaginationParams: The validated selection.
    """
    return PaginationParams(page=page, page_size=page_size)


Pagination = Annotated[PaginationParams, Depends(pagination_params)]


class PaginatedResponse(BaseModel, Generic[T]):
    """One page of a list result plus the metadata to request the others.

    ``total_pages`` is derived from ``total`` and ``page_size`` and cannot be
    set directly. ``page_size`` must be at least 1, so the division is always
    defined.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    items: list[T] = Field(description="Items on this page, in result order")
    total: int = Field(ge=0, description="Number of items across all pages")
    page: int = Field(ge=1, description="Page number of this page")
    page_size: int = Field(ge=1, description="Page size used for the query")

    @computed_field(alias="totalPages")  # type: ignore[prop-decorator]
    @property
    def total_pages(self) -> int:
        """Number of pages needed to hold ``total`` items."""
        return math.ceil(self.total / self.page_size)

    @classmethod
    def create(cls, items: Iterable[T], total: int, params: PaginationParams) -> Self:
        """Wrap an already-sliced page of items.

        Args:
            items: The items of the requested page.
            total: Number of items matching the query across all pages.
            params: The pagination the items were sliced with.

        Returns:
            Self: The paginated response.
        """
        return cls(
            items=list(items),
            total=total,
            page=params.page,
            page_size=params.page_size,
        )
