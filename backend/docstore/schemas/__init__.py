"""
Schema Exports
"""

from docstore.schemas.results import (
    DeleteResult,
    InsertResult,
    UpdateResult,
    strip_internal_fields,
)

__all__ = [
    "InsertResult",
    "UpdateResult",
    "DeleteResult",
    "strip_internal_fields",
]
