"""
Repository Interface Definitions

Defines the abstract interface for zips collection operations.
This enables swapping implementations (MongoDB, in-memory fake for tests)
without changing consumer code.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, List, Optional


@dataclass
class WriteResult:
    """
    Result of a write operation.

    Attributes:
        matched_count: Number of documents that matched the filter
        modified_count: Number of documents actually modified (or deleted)
        upserted_id: ID of inserted/upserted document (if any)
    """
    matched_count: int
    modified_count: int
    upserted_id: Optional[str] = None


class ZipRepositoryInterface(ABC):
    """
    Abstract interface for zips collection operations.

    Implementations:
    - MongoZipRepository: pymongo-backed
    - FakeZipRepository: in-memory (tests/helpers)

    All methods follow fail-fast semantics: store errors propagate to the
    caller unchanged.
    """

    @abstractmethod
    def find_one(
        self, filter: Dict[str, Any], projection: Optional[Dict[str, Any]] = None
    ) -> Optional[Dict[str, Any]]:
        """
        Find a single zip document.

        Args:
            filter: MongoDB query filter (e.g., {"_id": "01001"})
            projection: Fields to include

        Returns:
            Document dict if found, None otherwise
        """
        pass

    @abstractmethod
    def find(
        self,
        filter: Dict[str, Any],
        projection: Optional[Dict[str, Any]] = None,
        sort: Optional[List[tuple]] = None,
        limit: Optional[int] = None,
        skip: int = 0,
    ) -> List[Dict[str, Any]]:
        """
        Find multiple zip documents.

        Args:
            filter: MongoDB query filter
            projection: Fields to include
            sort: Sort order as list of (field, direction) tuples, primary key first
            limit: Maximum documents to return (None = unbounded)
            skip: Number of documents to skip

        Returns:
            List of matching documents
        """
        pass

    @abstractmethod
    def count_documents(self, filter: Dict[str, Any]) -> int:
        """Count documents matching the filter."""
        pass

    @abstractmethod
    def insert_one(self, document: Dict[str, Any]) -> WriteResult:
        """
        Insert a single document.

        Returns:
            WriteResult with upserted_id set to the new document's _id
        """
        pass

    @abstractmethod
    def update_one(
        self,
        filter: Dict[str, Any],
        update: Dict[str, Any],
        upsert: bool = False,
    ) -> WriteResult:
        """
        Update a single document.

        Args:
            filter: MongoDB query filter
            update: Update operations (e.g., {"$set": {...}})
            upsert: Create document if not found

        Returns:
            WriteResult with match/modify counts
        """
        pass

    @abstractmethod
    def delete_one(self, filter: Dict[str, Any]) -> WriteResult:
        """
        Delete a single document.

        Returns:
            WriteResult with delete count
        """
        pass

    @abstractmethod
    def ping(self) -> bool:
        """Return True if the store answers, False otherwise."""
        pass
