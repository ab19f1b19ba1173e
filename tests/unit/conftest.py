"""
Global fixtures for all unit tests.

This conftest provides autouse fixtures that prevent real external service calls:
- MongoDB connection attempts (would cause 5-30s timeout per test)
- Environment variable isolation (prevents real connection strings leaking in)

These fixtures apply automatically to ALL tests in tests/unit/.
"""

import pytest
from unittest.mock import patch, MagicMock

from tests.fixtures.sample_zips import SAMPLE_ZIPS
from tests.helpers.fake_repository import FakeZipRepository


@pytest.fixture(autouse=True)
def mock_mongodb():
    """
    Prevent MongoDB connection attempts in all unit tests.

    MongoClient("") defaults to localhost:27017, causing 5-30s timeout per test.
    """
    with patch("pymongo.MongoClient") as mock_client:
        mock_instance = MagicMock()
        mock_db = MagicMock()
        mock_collection = MagicMock()

        # Setup chain: client["db"]["collection"]
        mock_instance.__getitem__ = MagicMock(return_value=mock_db)
        mock_db.__getitem__ = MagicMock(return_value=mock_collection)
        mock_collection.find_one = MagicMock(return_value=None)
        mock_collection.find = MagicMock(return_value=[])

        mock_client.return_value = mock_instance
        yield mock_client


@pytest.fixture(autouse=True)
def isolate_environment(monkeypatch):
    """
    Isolate test environment from real MongoDB configuration.
    """
    for name in ("MONGODB_URI", "MONGO_DB_NAME", "MONGO_COLLECTION", "MONGO_TIMEOUT_MS"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def sample_zips():
    """Stored-shape zip documents (fresh copy per test)."""
    return [dict(doc) for doc in SAMPLE_ZIPS]


@pytest.fixture
def fake_repository(sample_zips):
    """In-memory repository preloaded with the sample zips."""
    return FakeZipRepository(sample_zips)
