"""
Product API - MongoDB Collection Accessor
==========================================

What:  Owns the MongoDB client and hands the product collection to handlers.
How:   ProductDbContext is built once by the lifespan in main.py and stored on
       app.state.db. Route handlers receive it (or its collection) through the
       FastAPI dependencies defined below.
When:  Constructed at startup; closed at shutdown.

Connection behaviour:
    AsyncMongoClient connects in the background. Construction only parses the
    URI, so an unreachable server surfaces on the first operation (or the
    health check), not at startup. Missing configuration, on the other hand,
    is fatal at construction time.

    The client is safe for concurrent use by many in-flight requests and
    keeps its own connection pool; the context holds no per-request state.
"""

import logging
from typing import Any, Dict, Optional

from fastapi import Request
from pymongo import AsyncMongoClient
from pymongo.asynchronous.collection import AsyncCollection
from pymongo.asynchronous.database import AsyncDatabase

from app.config import Settings
from app.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


class ProductDbContext:
    """
    Process-wide handle on the product collection.

    Args:
        config: Settings carrying the connection string, database name and
                collection name.
        client: Optional pre-built client (tests inject a mock here).

    Raises:
        ConfigurationError: any of the three required values is missing.
    """

    def __init__(self, config: Settings, client: Optional[AsyncMongoClient] = None):
        missing = config.missing_required()
        if missing:
            raise ConfigurationError(missing=missing)

        self._collection_name: str = config.mongodb_collection_name
        self._client: AsyncMongoClient = client or AsyncMongoClient(
            config.mongodb_connection_string
        )
        self._database: AsyncDatabase = self._client.get_database(config.mongodb_database_name)

        logger.info(
            "MongoDB context ready: database=%s collection=%s",
            config.mongodb_database_name,
            self._collection_name,
        )

    @property
    def products(self) -> AsyncCollection:
        """The product collection."""
        return self._database.get_collection(self._collection_name)

    async def ping(self) -> Dict[str, Any]:
        """Round-trip to the server; raises a PyMongoError when it is unreachable."""
        return await self._client.admin.command("ping")

    async def close(self) -> None:
        """Close all pooled connections."""
        await self._client.close()


# ── Dependencies ──────────────────────────────────────────────────────────
def get_db_context(request: Request) -> ProductDbContext:
    """FastAPI dependency returning the context built by the lifespan."""
    return request.app.state.db


def get_product_collection(request: Request) -> AsyncCollection:
    """
    FastAPI dependency returning the product collection.

    Example usage in a route:
        @router.get("/")
        async def list_products(products: AsyncCollection = Depends(get_product_collection)):
            ...
    """
    return get_db_context(request).products
