"""
Zip Service

CRUD and listing operations for zip records on top of an injected
repository. Every call is a direct pass-through to one or two store
operations; store errors propagate unchanged.
"""

import logging
from typing import Any, List, Mapping, Optional

from src.common.repositories.base import WriteResult, ZipRepositoryInterface

from .pagination import PageRequest, PageResult, paginate
from .query import FilterSpec
from .record import PROJECTION, ZipRecord, from_storage, id_filter, parse_int, to_document
from .sorting import SortSpec, default_sort

logger = logging.getLogger(__name__)

# Stored fields an update may $set; _id is never writable
UPDATABLE_FIELDS = ("city", "state", "pop")

DEFAULT_LIMIT = 100


class ZipService:
    """
    Operations on the zips collection.

    Usage:
        service = ZipService(get_zip_repository())
        page = service.paginate(build_filter(args), build_sort(args.get("sort")), PageRequest())
    """

    def __init__(self, repository: ZipRepositoryInterface):
        self.repository = repository

    def all(
        self,
        filter_spec: Optional[FilterSpec] = None,
        sort_spec: Optional[SortSpec] = None,
        offset: int = 0,
        limit: Optional[int] = DEFAULT_LIMIT,
    ) -> List[ZipRecord]:
        """
        List zip records without page bookkeeping.

        Args:
            filter_spec: Equality filter (default: match all)
            sort_spec: Sort keys (default: population ascending)
            offset: Documents to skip
            limit: Maximum records (None = unbounded)
        """
        filter_spec = filter_spec or FilterSpec()
        if sort_spec is None:
            sort_spec = default_sort()

        query = filter_spec.to_query()
        logger.debug(
            f"getting all zips, filter={query}, sort={sort_spec.to_pymongo()}, "
            f"offset={offset}, limit={limit}"
        )

        documents = self.repository.find(
            query,
            projection=PROJECTION,
            sort=sort_spec.to_pymongo(),
            limit=limit,
            skip=offset,
        )
        return [from_storage(doc) for doc in documents]

    def paginate(
        self,
        filter_spec: FilterSpec,
        sort_spec: SortSpec,
        page_request: PageRequest,
    ) -> PageResult:
        """Fetch one page of zip records. See pagination.paginate."""
        return paginate(self.repository, filter_spec, sort_spec, page_request)

    def count(self, filter_spec: Optional[FilterSpec] = None) -> int:
        query = (filter_spec or FilterSpec()).to_query()
        return self.repository.count_documents(query)

    def find(self, zip_id: str) -> Optional[ZipRecord]:
        """
        Look up a zip record by id.

        Returns:
            ZipRecord, or None when no document has this id
        """
        logger.debug(f"getting zip {zip_id}")

        doc = self.repository.find_one(id_filter(zip_id), PROJECTION)
        return None if doc is None else from_storage(doc)

    def create(self, record: ZipRecord) -> WriteResult:
        """Insert a new document for the record."""
        logger.debug(f"saving {record}")
        return self.repository.insert_one(to_document(record))

    def update(self, zip_id: str, updates: Mapping[str, Any]) -> WriteResult:
        """
        Set the editable fields of a stored zip.

        population is written as pop. Anything else, including id/_id, is
        ignored. When nothing editable remains the store is not called.
        """
        logger.debug(f"updating zip {zip_id} with {dict(updates)}")

        changes = build_update(updates)
        if not changes:
            logger.debug(f"no editable fields for zip {zip_id}, skipping update")
            return WriteResult(matched_count=0, modified_count=0)

        return self.repository.update_one(id_filter(zip_id), {"$set": changes})

    def destroy(self, zip_id: str) -> WriteResult:
        """Remove the document for this id."""
        logger.debug(f"destroying zip {zip_id}")
        return self.repository.delete_one(id_filter(zip_id))


def build_update(updates: Optional[Mapping[str, Any]]) -> dict:
    """
    Translate external update fields into a $set document.

    Example:
        >>> build_update({"id": "x", "city": "AGAWAM", "population": "15338"})
        {'city': 'AGAWAM', 'pop': 15338}
    """
    if not updates:
        return {}

    changes = {key: updates[key] for key in UPDATABLE_FIELDS if key in updates}

    # population takes precedence over a raw pop value
    if updates.get("population") is not None:
        changes["pop"] = updates["population"]
    if "pop" in changes:
        changes["pop"] = parse_int(changes["pop"])
    return changes
