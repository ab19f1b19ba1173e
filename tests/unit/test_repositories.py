"""
Tests for the repository pattern implementation.

Tests the zip repository abstraction layer over pymongo.
"""

import pytest
from unittest.mock import MagicMock, patch
from pymongo.errors import ServerSelectionTimeoutError

from src.common.repositories import (
    get_zip_repository,
    ZipRepositoryInterface,
    WriteResult,
    RepositoryConfig,
)
from src.common.repositories.mongo_repository import MongoZipRepository


class TestWriteResult:
    """Tests for WriteResult dataclass."""

    def test_write_result_defaults(self):
        """WriteResult should have sensible defaults."""
        result = WriteResult(matched_count=1, modified_count=1)

        assert result.matched_count == 1
        assert result.modified_count == 1
        assert result.upserted_id is None


class TestRepositoryConfig:
    """Tests for RepositoryConfig."""

    def test_config_from_env_defaults(self):
        """Should fall back to local defaults with no environment."""
        with patch.dict("os.environ", {}, clear=True):
            config = RepositoryConfig.from_env()

            assert config.mongodb_uri == "mongodb://localhost:27017"
            assert config.database == "zips_development"
            assert config.collection == "zips"
            assert config.timeout_ms == 5000

    def test_config_from_env_overrides(self):
        env = {
            "MONGODB_URI": "mongodb://db.example:27017",
            "MONGO_DB_NAME": "test",
            "MONGO_COLLECTION": "zips_copy",
            "MONGO_TIMEOUT_MS": "1500",
        }
        with patch.dict("os.environ", env, clear=True):
            config = RepositoryConfig.from_env()

            assert config.mongodb_uri == "mongodb://db.example:27017"
            assert config.database == "test"
            assert config.collection == "zips_copy"
            assert config.timeout_ms == 1500

    @pytest.mark.parametrize("value", ["soon", "0", "-10"])
    def test_config_invalid_timeout_defaults(self, value):
        """Should default the timeout if it is not a positive integer."""
        with patch.dict("os.environ", {"MONGO_TIMEOUT_MS": value}, clear=True):
            config = RepositoryConfig.from_env()

            assert config.timeout_ms == 5000


class TestGetZipRepository:
    """Tests for the repository factory."""

    def test_builds_mongo_repository(self):
        repo = get_zip_repository(RepositoryConfig(mongodb_uri="mongodb://test", database="db", collection="c"))

        assert isinstance(repo, MongoZipRepository)
        assert isinstance(repo, ZipRepositoryInterface)

    def test_returns_new_instance_each_call(self):
        """No process-wide singleton: callers own their repository."""
        config = RepositoryConfig(mongodb_uri="mongodb://test")

        assert get_zip_repository(config) is not get_zip_repository(config)


class TestMongoZipRepository:
    """Tests for MongoZipRepository."""

    @pytest.fixture
    def mock_client(self):
        """Patch MongoClient where the repository imports it."""
        with patch("src.common.repositories.mongo_repository.MongoClient") as mock_client_cls:
            yield mock_client_cls

    @pytest.fixture
    def mock_collection(self, mock_client):
        """Create a mock MongoDB collection."""
        mock_collection = MagicMock()
        mock_db = MagicMock()
        mock_db.__getitem__.return_value = mock_collection
        mock_client.return_value.__getitem__.return_value = mock_db
        yield mock_collection

    def test_client_created_lazily_with_timeouts(self, mock_client, mock_collection):
        repo = MongoZipRepository("mongodb://test", timeout_ms=1234)
        mock_client.assert_not_called()

        repo.count_documents({})

        mock_client.assert_called_once_with(
            "mongodb://test",
            serverSelectionTimeoutMS=1234,
            connectTimeoutMS=1234,
            socketTimeoutMS=1234,
        )

    def test_uses_injected_client(self, mock_client):
        client = MagicMock()

        repo = MongoZipRepository("mongodb://test", database="db", collection="zips", client=client)
        repo.count_documents({})

        mock_client.assert_not_called()
        client.__getitem__.assert_called_once_with("db")

    def test_find_one(self, mock_collection):
        """Should delegate find_one to MongoDB collection."""
        mock_collection.find_one.return_value = {"_id": "01001", "city": "AGAWAM"}

        repo = MongoZipRepository("mongodb://test")
        result = repo.find_one({"_id": "01001"}, {"_id": True})

        mock_collection.find_one.assert_called_once_with({"_id": "01001"}, {"_id": True})
        assert result == {"_id": "01001", "city": "AGAWAM"}

    def test_find_one_not_found(self, mock_collection):
        """Should return None when document not found."""
        mock_collection.find_one.return_value = None

        repo = MongoZipRepository("mongodb://test")

        assert repo.find_one({"_id": "nonexistent"}) is None

    def test_find_with_options(self, mock_collection):
        """Should apply find options (sort, skip, limit) with sort keys in order."""
        mock_cursor = MagicMock()
        mock_cursor.sort.return_value = mock_cursor
        mock_cursor.skip.return_value = mock_cursor
        mock_cursor.limit.return_value = mock_cursor
        mock_cursor.__iter__ = lambda self: iter([{"_id": "1"}, {"_id": "2"}])
        mock_collection.find.return_value = mock_cursor

        repo = MongoZipRepository("mongodb://test")
        result = repo.find(
            {"state": "MA"},
            projection={"_id": True},
            sort=[("pop", -1), ("city", 1)],
            limit=10,
            skip=20,
        )

        mock_collection.find.assert_called_once_with({"state": "MA"}, {"_id": True})
        mock_cursor.sort.assert_called_once_with([("pop", -1), ("city", 1)])
        mock_cursor.skip.assert_called_once_with(20)
        mock_cursor.limit.assert_called_once_with(10)
        assert result == [{"_id": "1"}, {"_id": "2"}]

    def test_find_without_options(self, mock_collection):
        """No sort, no skip and a None limit leave the cursor untouched."""
        mock_cursor = MagicMock()
        mock_cursor.__iter__ = lambda self: iter([])
        mock_collection.find.return_value = mock_cursor

        repo = MongoZipRepository("mongodb://test")
        repo.find({}, sort=[], limit=None, skip=0)

        mock_cursor.sort.assert_not_called()
        mock_cursor.skip.assert_not_called()
        mock_cursor.limit.assert_not_called()

    def test_count_documents(self, mock_collection):
        mock_collection.count_documents.return_value = 42

        repo = MongoZipRepository("mongodb://test")

        assert repo.count_documents({"city": "X"}) == 42
        mock_collection.count_documents.assert_called_once_with({"city": "X"})

    def test_insert_one(self, mock_collection):
        mock_collection.insert_one.return_value = MagicMock(inserted_id="01001")

        repo = MongoZipRepository("mongodb://test")
        result = repo.insert_one({"_id": "01001"})

        assert result.upserted_id == "01001"

    def test_update_one(self, mock_collection):
        """Should return WriteResult with counts."""
        mock_collection.update_one.return_value = MagicMock(
            matched_count=1, modified_count=1, upserted_id=None
        )

        repo = MongoZipRepository("mongodb://test")
        result = repo.update_one({"_id": "01001"}, {"$set": {"city": "X"}})

        mock_collection.update_one.assert_called_once_with(
            {"_id": "01001"}, {"$set": {"city": "X"}}, upsert=False
        )
        assert result.matched_count == 1
        assert result.modified_count == 1
        assert result.upserted_id is None

    def test_delete_one(self, mock_collection):
        mock_collection.delete_one.return_value = MagicMock(deleted_count=1)

        repo = MongoZipRepository("mongodb://test")
        result = repo.delete_one({"_id": "01001"})

        assert result.matched_count == 1
        assert result.modified_count == 1

    def test_errors_propagate(self, mock_collection):
        """Fail-fast: store errors reach the caller unchanged."""
        mock_collection.count_documents.side_effect = ServerSelectionTimeoutError("timeout")

        repo = MongoZipRepository("mongodb://test")

        with pytest.raises(ServerSelectionTimeoutError):
            repo.count_documents({})

    def test_ping(self, mock_client, mock_collection):
        repo = MongoZipRepository("mongodb://test")

        assert repo.ping() is True
        mock_client.return_value.admin.command.assert_called_once_with("ping")

    def test_ping_failure(self, mock_client, mock_collection):
        mock_client.return_value.admin.command.side_effect = ServerSelectionTimeoutError("down")

        repo = MongoZipRepository("mongodb://test")

        assert repo.ping() is False

    def test_close(self, mock_client, mock_collection):
        repo = MongoZipRepository("mongodb://test")
        repo.count_documents({})

        repo.close()

        mock_client.return_value.close.assert_called_once()
        repo.count_documents({})
        assert mock_client.call_count == 2
