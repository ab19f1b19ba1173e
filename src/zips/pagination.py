"""
Pagination for zip listings.

A page is fetched with two independent round trips: one find() for the
slice of documents and one count_documents() for the total. Neither
mutates state, so their order does not matter.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Tuple

from src.common.repositories.base import ZipRepositoryInterface

from .query import FilterSpec
from .record import PROJECTION, ZipRecord, from_storage, parse_int
from .sorting import SortSpec

logger = logging.getLogger(__name__)

DEFAULT_PAGE = 1
DEFAULT_PER_PAGE = 30


@dataclass(frozen=True)
class PageRequest:
    """Requested page number (1-based) and page size."""

    page: int = DEFAULT_PAGE
    per_page: int = DEFAULT_PER_PAGE

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.per_page

    @classmethod
    def from_params(
        cls,
        params: Optional[Mapping[str, Any]],
        default_per_page: int = DEFAULT_PER_PAGE,
    ) -> "PageRequest":
        """
        Read page and per_page (or perPage) from request parameters.

        Missing values take the defaults. Values are not range-checked.
        """
        params = params or {}

        page = params.get("page")
        per_page = params.get("per_page")
        if per_page is None:
            per_page = params.get("perPage")

        return cls(
            page=DEFAULT_PAGE if page is None else parse_int(page, DEFAULT_PAGE),
            per_page=default_per_page if per_page is None else parse_int(per_page, default_per_page),
        )


@dataclass(frozen=True)
class PageResult:
    """One page of zip records plus the total number of matches."""

    items: Tuple[ZipRecord, ...]
    page: int
    per_page: int
    total: int

    @property
    def total_pages(self) -> int:
        if self.per_page <= 0:
            return 1
        return max(1, (self.total + self.per_page - 1) // self.per_page)

    @property
    def has_prev(self) -> bool:
        return self.page > 1

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self):
        return iter(self.items)

    def pagination(self) -> Dict[str, Any]:
        """Pagination metadata for API responses."""
        return {
            "page": self.page,
            "per_page": self.per_page,
            "total_count": self.total,
            "total_pages": self.total_pages,
            "has_prev": self.has_prev,
            "has_next": self.has_next,
        }


def paginate(
    repository: ZipRepositoryInterface,
    filter_spec: FilterSpec,
    sort_spec: SortSpec,
    page_request: PageRequest,
) -> PageResult:
    """
    Fetch one page of zip records and the total match count.

    Args:
        repository: Store to query
        filter_spec: Equality filter (empty matches all)
        sort_spec: Ordered sort keys (empty leaves store order)
        page_request: Page number and size; per_page is not validated here

    Returns:
        PageResult with the page's records, eagerly converted. A page past
        the end has no items but still reports the full total.
    """
    query = filter_spec.to_query()
    offset = page_request.offset

    logger.debug(
        f"paginate: filter={query}, sort={sort_spec.to_pymongo()}, "
        f"offset={offset}, limit={page_request.per_page}"
    )

    documents = repository.find(
        query,
        projection=PROJECTION,
        sort=sort_spec.to_pymongo(),
        limit=page_request.per_page,
        skip=offset,
    )
    items = tuple(from_storage(doc) for doc in documents)

    total = repository.count_documents(query)

    return PageResult(
        items=items,
        page=page_request.page,
        per_page=page_request.per_page,
        total=total,
    )
