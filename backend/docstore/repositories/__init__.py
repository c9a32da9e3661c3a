"""
Repository layer for database access.

DocumentStore is the single entry point handlers use; `document_store` is
the process-wide instance bound to the shared connection.
"""

from docstore.repositories.document_store import DocumentStore, box_object_id, document_store
from docstore.repositories.duplication import derive_roi_copy, derive_slide_copy

__all__ = [
    "DocumentStore",
    "document_store",
    "box_object_id",
    "derive_slide_copy",
    "derive_roi_copy",
]
