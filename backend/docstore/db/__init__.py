"""
Database module for MongoDB connection management.
"""

from docstore.db.errors import StoreError, store_operation
from docstore.db.ids import new_string_id, transform_id_to_object_id
from docstore.db.mongodb import (
    ConnectionProvider,
    close_mongo_connection,
    connect_to_mongo,
    db,
    get_connection,
    get_database,
    ping,
)

__all__ = [
    "db",
    "ConnectionProvider",
    "get_connection",
    "get_database",
    "connect_to_mongo",
    "close_mongo_connection",
    "ping",
    "StoreError",
    "store_operation",
    "new_string_id",
    "transform_id_to_object_id",
]
