"""
Zip code records: query translation, pagination and CRUD.

Public API:
- ZipRecord, from_storage, from_user_input, to_document: record shapes
- FilterSpec, build_filter: equality filters on city/state
- SortSpec, build_sort: ordered multi-key sort from "field:dir,..." strings
- PageRequest, PageResult, paginate: paged queries with total counts
- ZipService: CRUD over an injected repository
"""

from .pagination import PageRequest, PageResult, paginate
from .query import FilterSpec, build_filter
from .record import ZipRecord, from_storage, from_user_input, to_document
from .service import ZipService
from .sorting import SortSpec, build_sort

__all__ = [
    "ZipRecord",
    "from_storage",
    "from_user_input",
    "to_document",
    "FilterSpec",
    "build_filter",
    "SortSpec",
    "build_sort",
    "PageRequest",
    "PageResult",
    "paginate",
    "ZipService",
]
