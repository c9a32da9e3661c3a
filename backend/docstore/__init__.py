"""
Document store facade for caMicroscope slides, ROIs and related collections.

The module-level coroutines below are bound to the process-wide store:

    from docstore import find, duplicate_slide

    slides = await find("camic", "slide", {"_id": slide_id})
"""

from docstore.db.errors import StoreError
from docstore.repositories.document_store import DocumentStore, document_store

find = document_store.find
distinct = document_store.distinct
add = document_store.add
duplicate_slide = document_store.duplicate_slide
duplicate_rois = document_store.duplicate_rois
delete = document_store.delete
update = document_store.update
aggregate = document_store.aggregate

__all__ = [
    "DocumentStore",
    "StoreError",
    "document_store",
    "find",
    "distinct",
    "add",
    "duplicate_slide",
    "duplicate_rois",
    "delete",
    "update",
    "aggregate",
]
