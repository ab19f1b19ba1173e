"""
MongoDB Zip Repository

pymongo-backed implementation of ZipRepositoryInterface.
"""

import logging
from typing import Any, Dict, List, Optional

from pymongo import MongoClient
from pymongo.collection import Collection
from pymongo.errors import PyMongoError

from .base import WriteResult, ZipRepositoryInterface

logger = logging.getLogger(__name__)


class MongoZipRepository(ZipRepositoryInterface):
    """
    Repository over a single MongoDB zips collection.

    Connection Management:
    - One MongoClient per repository instance, created on first use
    - The application constructs the repository once and injects it
    - PyMongo handles the connection pool internally

    Error Handling:
    - Fail-fast: All errors propagate to caller
    - No silent failures - consumers must handle exceptions
    """

    def __init__(
        self,
        mongodb_uri: str,
        database: str = "zips_development",
        collection: str = "zips",
        timeout_ms: int = 5000,
        client: Optional[MongoClient] = None,
    ):
        """
        Initialize repository with connection parameters.

        Args:
            mongodb_uri: MongoDB connection string
            database: Database name (default: "zips_development")
            collection: Collection name (default: "zips")
            timeout_ms: Server selection/connect/socket timeout in milliseconds
            client: Pre-built MongoClient (skips lazy creation)
        """
        self._mongodb_uri = mongodb_uri
        self._database_name = database
        self._collection_name = collection
        self._timeout_ms = timeout_ms
        self._client = client
        self._collection: Optional[Collection] = None

    def _get_collection(self) -> Collection:
        """
        Get the MongoDB collection, creating the client if needed.

        Returns:
            MongoDB collection instance
        """
        if self._collection is None:
            if self._client is None:
                # Short timeouts so a dead server fails the request quickly
                self._client = MongoClient(
                    self._mongodb_uri,
                    serverSelectionTimeoutMS=self._timeout_ms,
                    connectTimeoutMS=self._timeout_ms,
                    socketTimeoutMS=self._timeout_ms,
                )
            self._collection = self._client[self._database_name][self._collection_name]
            logger.info(
                f"Zip repository connected: {self._database_name}.{self._collection_name}"
            )
        return self._collection

    def find_one(
        self, filter: Dict[str, Any], projection: Optional[Dict[str, Any]] = None
    ) -> Optional[Dict[str, Any]]:
        """Find a single zip document."""
        collection = self._get_collection()
        return collection.find_one(filter, projection)

    def find(
        self,
        filter: Dict[str, Any],
        projection: Optional[Dict[str, Any]] = None,
        sort: Optional[List[tuple]] = None,
        limit: Optional[int] = None,
        skip: int = 0,
    ) -> List[Dict[str, Any]]:
        """Find multiple zip documents."""
        collection = self._get_collection()
        cursor = collection.find(filter, projection)

        if sort:
            cursor = cursor.sort(sort)
        if skip > 0:
            cursor = cursor.skip(skip)
        if limit is not None:
            cursor = cursor.limit(limit)

        return list(cursor)

    def count_documents(self, filter: Dict[str, Any]) -> int:
        """Count documents matching the filter."""
        collection = self._get_collection()
        return collection.count_documents(filter)

    def insert_one(self, document: Dict[str, Any]) -> WriteResult:
        """Insert a single document."""
        collection = self._get_collection()
        result = collection.insert_one(document)

        return WriteResult(
            matched_count=0,
            modified_count=0,
            upserted_id=str(result.inserted_id) if result.inserted_id is not None else None,
        )

    def update_one(
        self,
        filter: Dict[str, Any],
        update: Dict[str, Any],
        upsert: bool = False,
    ) -> WriteResult:
        """
        Update a single document.

        Fail-fast behavior: exceptions propagate to caller.
        """
        collection = self._get_collection()
        result = collection.update_one(filter, update, upsert=upsert)

        return WriteResult(
            matched_count=result.matched_count,
            modified_count=result.modified_count,
            upserted_id=str(result.upserted_id) if result.upserted_id is not None else None,
        )

    def delete_one(self, filter: Dict[str, Any]) -> WriteResult:
        """Delete a single document."""
        collection = self._get_collection()
        result = collection.delete_one(filter)

        return WriteResult(
            matched_count=result.deleted_count,
            modified_count=result.deleted_count,
        )

    def ping(self) -> bool:
        """Run the ping admin command against the server."""
        try:
            self._get_collection()
            self._client.admin.command("ping")
            return True
        except PyMongoError as e:
            logger.warning(f"MongoDB ping failed: {e}")
            return False

    def close(self) -> None:
        """
        Close the underlying client.

        Used for testing or connection recovery.
        """
        if self._client is not None:
            self._client.close()
        self._client = None
        self._collection = None
        logger.info("Zip repository connection closed")
