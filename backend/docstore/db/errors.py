"""
Store Errors

Single error type for everything that goes wrong while talking to MongoDB.
Anything raised by the driver, including the ValueError/TypeError pymongo
uses for bad arguments, is logged once and re-raised as StoreError with the
original chained as __cause__, so callers handle one type while the driver
detail stays available.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

logger = logging.getLogger(__name__)


class StoreError(Exception):
    """Raised when a document store operation fails."""

    def __init__(
        self,
        message: str,
        operation: Optional[str] = None,
        database: Optional[str] = None,
        collection: Optional[str] = None,
    ):
        super().__init__(message)
        self.operation = operation
        self.database = database
        self.collection = collection


@asynccontextmanager
async def store_operation(
    operation: str,
    database: Optional[str],
    collection: Optional[str],
) -> AsyncGenerator[None, None]:
    """
    Context manager that turns driver failures into StoreError.

    Usage:
        async with store_operation("find", "camic", "slide"):
            docs = await collection.find(query).to_list(None)

    Args:
        operation: Name of the facade operation (for logging)
        database: Target database name
        collection: Target collection name

    Raises:
        StoreError: wrapping any exception raised inside (driver errors
            and the ValueError/TypeError pymongo raises for bad arguments)
    """
    try:
        yield
    except StoreError:
        raise
    except Exception as e:
        msg = f"{operation} failed on {database}.{collection}: {e}"
        logger.error(msg)
        raise StoreError(msg, operation=operation, database=database, collection=collection) from e
