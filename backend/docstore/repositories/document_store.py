"""
Document Store

Generic data-access facade over MongoDB used throughout the project.
Handlers call these operations with a database name, a collection name and
raw query documents instead of talking to the driver directly.

Every operation:
- normalizes `_id` values in filters (see docstore.db.ids)
- runs inside store_operation, so driver failures are logged and surface
  as StoreError
"""

import asyncio
import copy
import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

from motor.motor_asyncio import AsyncIOMotorCollection

from docstore.core import utc_now
from docstore.core.config import settings
from docstore.db.errors import store_operation
from docstore.db.ids import new_string_id, transform_id_to_object_id
from docstore.db.mongodb import ConnectionProvider, get_connection
from docstore.repositories.duplication import derive_roi_copy, derive_slide_copy
from docstore.schemas.results import DeleteResult, InsertResult, UpdateResult

logger = logging.getLogger(__name__)

Document = Dict[str, Any]


def box_object_id(doc: Document) -> Document:
    """Wrap `_id` as {"$oid": <id>} in place. The id value itself is not converted."""
    if "_id" in doc:
        doc["_id"] = {"$oid": doc["_id"]}
    return doc


class DocumentStore:
    """
    CRUD, aggregation and duplication operations over named collections.

    Usage:
        store = DocumentStore()
        slides = await store.find("camic", "slide", {"_id": slide_id})

    Args:
        connection_provider: Callable mapping a database name to a motor
            database handle. Defaults to the process-wide connection.
        duplication_concurrency: Max parallel inserts per duplication call.
    """

    def __init__(
        self,
        connection_provider: ConnectionProvider = get_connection,
        duplication_concurrency: Optional[int] = None,
    ):
        self.connection_provider = connection_provider
        if duplication_concurrency is None:
            duplication_concurrency = settings.DUPLICATION_CONCURRENCY
        if duplication_concurrency < 1:
            raise ValueError(f"duplication_concurrency must be >= 1, got {duplication_concurrency}")
        self.duplication_concurrency = duplication_concurrency

    def _collection(self, database: Optional[str], collection_name: str) -> AsyncIOMotorCollection:
        return self.connection_provider(database)[collection_name]

    async def find(
        self,
        database: Optional[str],
        collection_name: str,
        query: Optional[Document] = None,
        transform: bool = True,
        projection: Optional[Dict[str, Any]] = None,
    ) -> List[Document]:
        """
        Fetch every document matching `query`. An empty query matches all.

        With `transform`, each returned `_id` is boxed as {"$oid": <id>}.
        """
        async with store_operation("find", database, collection_name):
            query = transform_id_to_object_id(query)
            collection = self._collection(database, collection_name)
            docs = await collection.find(query, projection).to_list(None)

        if transform:
            for doc in docs:
                box_object_id(doc)
        return docs

    async def distinct(
        self,
        database: Optional[str],
        collection_name: str,
        field: str,
        query: Optional[Document] = None,
    ) -> List[Any]:
        """Distinct values of `field` among documents matching `query`."""
        async with store_operation("distinct", database, collection_name):
            query = transform_id_to_object_id(query)
            collection = self._collection(database, collection_name)
            return await collection.distinct(field, query)

    async def add(
        self,
        database: Optional[str],
        collection_name: str,
        data: Union[Document, Iterable[Document]],
    ) -> InsertResult:
        """
        Insert one document or a sequence of documents in a single batch.

        Payloads are inserted as given; `_id` values are not normalized.
        """
        docs = [data] if isinstance(data, Mapping) else list(data)
        if not docs:
            return InsertResult()

        async with store_operation("add", database, collection_name):
            collection = self._collection(database, collection_name)
            result = await collection.insert_many(docs)

        logger.debug(f"Inserted {len(result.inserted_ids)} documents into {database}.{collection_name}")
        return InsertResult.from_driver(result)

    async def duplicate_slide(
        self,
        database: Optional[str],
        collection_name: str,
        query: Document,
        transform: bool = True,
        projection: Optional[Dict[str, Any]] = None,
    ) -> List[Document]:
        """
        Copy a slide into a batch.

        `query` carries the source slide `_id`, the destination `batch` and
        `all_batch`, the batch every slide belongs to. Each matched slide is
        inserted again with a fresh `_id`, `prev_slide_id` pointing at the
        source, a new `create_date` and `collections == [batch, all_batch]`.

        Returns:
            Snapshots of the matched source slides, taken before copying.
        """
        async with store_operation("duplicate_slide", database, collection_name):
            query = transform_id_to_object_id(query)
            batch = query.get("batch")
            all_batch = query.get("all_batch")

            collection = self._collection(database, collection_name)
            sources = await collection.find({"_id": query.get("_id")}, projection).to_list(None)

            snapshots = copy.deepcopy(sources)
            payloads = [derive_slide_copy(doc, batch, all_batch, utc_now()) for doc in sources]
            await self._insert_concurrently(collection, payloads, "duplicate_slide")

        logger.info(f"Duplicated {len(payloads)} slide(s) into batch {batch!r}")
        if transform:
            for doc in snapshots:
                box_object_id(doc)
        return snapshots

    async def duplicate_rois(
        self,
        database: Optional[str],
        collection_name: str,
        query: Document,
    ) -> List[Document]:
        """
        Copy every ROI of one slide onto another slide.

        `query` carries `prev_slide_id` (source slide), `new_slide`
        (destination slide) and `batch_name`, stamped as `creator`. Copies
        get a fresh string `_id`, a new `create_date` and no annotations.

        Returns:
            Snapshots of the matched source ROIs, taken before copying.
        """
        async with store_operation("duplicate_rois", database, collection_name):
            query = transform_id_to_object_id(query)
            new_slide = query.get("new_slide")
            creator = query.get("batch_name")

            collection = self._collection(database, collection_name)
            sources = await collection.find(
                {"provenance.image.slide": query.get("prev_slide_id")}
            ).to_list(None)

            snapshots = copy.deepcopy(sources)
            payloads = [
                derive_roi_copy(doc, new_string_id(), new_slide, creator, utc_now())
                for doc in sources
            ]
            await self._insert_concurrently(collection, payloads, "duplicate_rois")

        logger.info(f"Duplicated {len(payloads)} ROI(s) onto slide {new_slide!r}")
        return snapshots

    async def delete(
        self,
        database: Optional[str],
        collection_name: str,
        filter: Optional[Document],
    ) -> DeleteResult:
        """Delete ALL documents matching `filter`."""
        async with store_operation("delete", database, collection_name):
            filter = transform_id_to_object_id(filter)
            collection = self._collection(database, collection_name)
            result = await collection.delete_many(filter)

        return DeleteResult.from_driver(result)

    async def update(
        self,
        database: Optional[str],
        collection_name: str,
        filter: Optional[Document],
        updates: Union[Document, List[Document]],
    ) -> UpdateResult:
        """Apply `updates` (operator document or pipeline) to ALL documents matching `filter`."""
        async with store_operation("update", database, collection_name):
            filter = transform_id_to_object_id(filter)
            collection = self._collection(database, collection_name)
            result = await collection.update_many(filter, updates)

        return UpdateResult.from_driver(result)

    async def aggregate(
        self,
        database: Optional[str],
        collection_name: str,
        pipeline: List[Document],
    ) -> List[Document]:
        """Run an aggregation pipeline. Stages are passed through unmodified."""
        async with store_operation("aggregate", database, collection_name):
            collection = self._collection(database, collection_name)
            return await collection.aggregate(pipeline).to_list(None)

    async def _insert_concurrently(
        self,
        collection: AsyncIOMotorCollection,
        payloads: List[Document],
        operation: str,
    ) -> None:
        """
        Insert each payload as its own write, in parallel.

        Waits for every insert. Each failure is logged, then the first one is
        raised. Inserts that succeeded stay in the collection.
        """
        if not payloads:
            return

        semaphore = asyncio.Semaphore(self.duplication_concurrency)

        async def insert_with_semaphore(payload: Document):
            async with semaphore:
                return await collection.insert_one(payload)

        tasks = [insert_with_semaphore(payload) for payload in payloads]
        results = await asyncio.gather(*tasks, return_exceptions=True)

        failures = [r for r in results if isinstance(r, BaseException)]
        for failure in failures:
            logger.error(f"{operation}: insert of derived document failed: {failure}")
        if failures:
            logger.error(f"{operation}: {len(failures)}/{len(payloads)} derived inserts failed")
            raise failures[0]


document_store = DocumentStore()
