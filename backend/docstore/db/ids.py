"""
Identifier normalization.

Slides are keyed by native ObjectIds while callers (HTTP handlers, scripts)
pass ids around as 24-char hex strings. Queries are rewritten here before
they reach the driver so equality matches on `_id` hit.
"""

import re
from typing import Any, Dict, Mapping, Optional

from bson import ObjectId

# Keys whose values are matched against ObjectId-typed fields
ID_FIELDS = frozenset({"_id"})

# Logical operators whose value is a list of sub-queries
LOGICAL_OPERATORS = frozenset({"$and", "$or", "$nor"})

OBJECT_ID_PATTERN = re.compile(r"^[0-9a-fA-F]{24}$")


def is_object_id_string(value: Any) -> bool:
    """True for strings that render a valid ObjectId."""
    return isinstance(value, str) and OBJECT_ID_PATTERN.match(value) is not None


def _coerce_id_value(value: Any) -> Any:
    """Convert an `_id` match value, descending into operator expressions."""
    if is_object_id_string(value):
        return ObjectId(value)
    if isinstance(value, list):
        return [_coerce_id_value(v) for v in value]
    if isinstance(value, Mapping):
        # {"$in": [...]}, {"$ne": ...} etc. Plain embedded documents are left alone.
        return {k: _coerce_id_value(v) if k.startswith("$") else v for k, v in value.items()}
    return value


def transform_id_to_object_id(query: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    """
    Return a copy of `query` with hex-string ids under `_id` keys converted to ObjectId.

    The input mapping is not modified. Strings that are not valid ObjectIds
    and values that already are ObjectIds pass through, so the function is
    idempotent.
    """
    if not query:
        return {}

    normalized: Dict[str, Any] = {}
    for key, value in query.items():
        if key in ID_FIELDS:
            normalized[key] = _coerce_id_value(value)
        elif key in LOGICAL_OPERATORS and isinstance(value, list):
            normalized[key] = [
                transform_id_to_object_id(sub) if isinstance(sub, Mapping) else sub for sub in value
            ]
        else:
            normalized[key] = value
    return normalized


def new_string_id() -> str:
    """Fresh ObjectId rendered as hex. ROI documents store their _id in this form."""
    return str(ObjectId())
