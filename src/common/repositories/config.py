"""
Repository Configuration and Factory

Provides a factory function that builds the repository implementation
from environment configuration. The caller owns the returned instance and
passes it to whatever needs it; there is no process-wide singleton.
"""

import os
import logging
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

from .base import ZipRepositoryInterface

load_dotenv()

logger = logging.getLogger(__name__)

DEFAULT_MONGODB_URI = "mongodb://localhost:27017"
DEFAULT_TIMEOUT_MS = 5000


@dataclass
class RepositoryConfig:
    """
    Configuration for repository initialization.

    Loaded from environment variables with sensible defaults.
    """
    mongodb_uri: str = DEFAULT_MONGODB_URI

    # Database/collection names
    database: str = "zips_development"
    collection: str = "zips"

    # Applied to server selection, connect and socket timeouts
    timeout_ms: int = DEFAULT_TIMEOUT_MS

    @classmethod
    def from_env(cls) -> "RepositoryConfig":
        """
        Load configuration from environment variables.

        Environment variables:
        - MONGODB_URI: MongoDB connection string (default: localhost)
        - MONGO_DB_NAME: Database name (default: zips_development)
        - MONGO_COLLECTION: Collection name (default: zips)
        - MONGO_TIMEOUT_MS: Client timeouts in milliseconds (default: 5000)

        Returns:
            RepositoryConfig instance
        """
        timeout_str = os.getenv("MONGO_TIMEOUT_MS", str(DEFAULT_TIMEOUT_MS))
        try:
            timeout_ms = int(timeout_str)
            if timeout_ms <= 0:
                raise ValueError(timeout_str)
        except ValueError:
            logger.warning(
                f"Invalid MONGO_TIMEOUT_MS '{timeout_str}', defaulting to {DEFAULT_TIMEOUT_MS}"
            )
            timeout_ms = DEFAULT_TIMEOUT_MS

        return cls(
            mongodb_uri=os.getenv("MONGODB_URI") or DEFAULT_MONGODB_URI,
            database=os.getenv("MONGO_DB_NAME") or "zips_development",
            collection=os.getenv("MONGO_COLLECTION") or "zips",
            timeout_ms=timeout_ms,
        )


def get_zip_repository(config: Optional[RepositoryConfig] = None) -> ZipRepositoryInterface:
    """
    Build a zip repository.

    Args:
        config: Repository settings (default: RepositoryConfig.from_env())

    Returns:
        ZipRepositoryInterface implementation
    """
    if config is None:
        config = RepositoryConfig.from_env()

    from .mongo_repository import MongoZipRepository
    repository = MongoZipRepository(
        mongodb_uri=config.mongodb_uri,
        database=config.database,
        collection=config.collection,
        timeout_ms=config.timeout_ms,
    )
    logger.info(f"Initialized zip repository for {config.database}.{config.collection}")
    return repository
