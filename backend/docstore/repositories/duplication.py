"""
Slide and ROI copy derivation.

A duplicated slide keeps every field of its source except identity and batch
membership; a duplicated ROI is re-pointed at the new slide and starts
without annotations. Both functions work on a deep copy so the fetched
source stays intact and can be returned to the caller as matched.
"""

import copy
from datetime import datetime
from typing import Any, Dict


def derive_slide_copy(
    source: Dict[str, Any], batch: Any, all_batch: Any, now: datetime
) -> Dict[str, Any]:
    """Build the insert payload for a copy of `source`.

    `_id` is dropped so MongoDB assigns a fresh one and is remembered as
    `prev_slide_id`. Previous batch membership is replaced with exactly
    the destination batch and the catch-all batch.
    """
    new_doc = copy.deepcopy(source)
    new_doc["prev_slide_id"] = new_doc.pop("_id", None)
    new_doc["create_date"] = now
    new_doc["collections"] = [batch, all_batch]
    return new_doc


def derive_roi_copy(
    source: Dict[str, Any], new_id: str, new_slide: Any, creator: Any, now: datetime
) -> Dict[str, Any]:
    """Build the insert payload for a copy of ROI `source` attached to `new_slide`."""
    new_doc = copy.deepcopy(source)
    new_doc["_id"] = new_id
    new_doc["create_date"] = now
    if new_doc.get("provenance") is None:
        new_doc["provenance"] = {}
    if new_doc["provenance"].get("image") is None:
        new_doc["provenance"]["image"] = {}
    new_doc["provenance"]["image"]["slide"] = new_slide
    # creator carries the batch name; may not be the real author
    new_doc["creator"] = creator
    new_doc["annotations"] = []
    return new_doc
