"""
Shared fixtures for frontend tests.

Builds the Flask app around an in-memory repository so no MongoDB
connection is attempted.
"""

import pytest

from tests.fixtures.sample_zips import SAMPLE_ZIPS
from tests.helpers.fake_repository import FakeZipRepository


@pytest.fixture
def repository():
    """In-memory zip repository preloaded with the sample zips."""
    return FakeZipRepository([dict(doc) for doc in SAMPLE_ZIPS])


@pytest.fixture
def app(repository):
    """Flask app wired to the in-memory repository."""
    # Import app here to avoid import-time side effects during collection
    from frontend.app import create_app

    return create_app(repository=repository, config={"TESTING": True, "DEFAULT_PER_PAGE": 30, "MAX_PER_PAGE": 100})


@pytest.fixture
def client(app):
    """Create a test client for the Flask app."""
    with app.test_client() as client:
        yield client
