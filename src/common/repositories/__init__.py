"""
Repository Pattern for MongoDB Operations

Provides an abstraction layer over the zips collection so the query
translation layer and the web app never touch pymongo directly.

Public API:
- get_zip_repository(): Factory to build a repository instance
- ZipRepositoryInterface: Abstract interface for the zips collection
- WriteResult: Result dataclass for write operations

Usage:
    from src.common.repositories import get_zip_repository

    repo = get_zip_repository()
    doc = repo.find_one({"_id": "01001"})
"""

from .base import WriteResult, ZipRepositoryInterface
from .config import RepositoryConfig, get_zip_repository

__all__ = [
    "get_zip_repository",
    "ZipRepositoryInterface",
    "WriteResult",
    "RepositoryConfig",
]
