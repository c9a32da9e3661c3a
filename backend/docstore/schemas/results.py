"""
Write results returned by the document store.

The driver's result objects are converted into plain Pydantic models so
callers never receive connection or cluster bookkeeping along with the
counts they asked for.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

# Server/driver bookkeeping that must not leak into responses
INTERNAL_RESULT_FIELDS = frozenset(
    {"connection", "$clusterTime", "operationTime", "electionId", "opTime"}
)


def strip_internal_fields(raw_result: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    if not raw_result:
        return {}
    return {k: v for k, v in raw_result.items() if k not in INTERNAL_RESULT_FIELDS}


class InsertResult(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True)

    acknowledged: bool = True
    inserted_ids: List[Any] = Field(default_factory=list)

    @property
    def inserted_count(self) -> int:
        return len(self.inserted_ids)

    @classmethod
    def from_driver(cls, result: Any) -> "InsertResult":
        return cls(acknowledged=result.acknowledged, inserted_ids=list(result.inserted_ids))


class UpdateResult(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True)

    acknowledged: bool = True
    matched_count: Optional[int] = None
    modified_count: Optional[int] = None
    upserted_id: Optional[Any] = None
    raw_result: Dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_driver(cls, result: Any) -> "UpdateResult":
        # Counts raise InvalidOperation on unacknowledged writes
        if not result.acknowledged:
            return cls(acknowledged=False)
        return cls(
            acknowledged=True,
            matched_count=result.matched_count,
            modified_count=result.modified_count,
            upserted_id=result.upserted_id,
            raw_result=strip_internal_fields(result.raw_result),
        )


class DeleteResult(BaseModel):
    acknowledged: bool = True
    deleted_count: Optional[int] = None
    raw_result: Dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_driver(cls, result: Any) -> "DeleteResult":
        if not result.acknowledged:
            return cls(acknowledged=False)
        return cls(
            acknowledged=True,
            deleted_count=result.deleted_count,
            raw_result=strip_internal_fields(result.raw_result),
        )
