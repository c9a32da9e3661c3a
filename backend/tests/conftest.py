"""
Shared test fixtures and configuration.

Environment variables are set BEFORE any docstore imports to prevent
accidental connections to real databases.
"""

import os
import sys

# Ensure the backend package is importable
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

# Override settings before any code imports the settings singleton
os.environ["MONGODB_URL"] = "mongodb://localhost:27017"
os.environ["DATABASE_NAME"] = "test_camic"
os.environ["DUPLICATION_CONCURRENCY"] = "4"

import pytest  # noqa: E402
from bson import ObjectId  # noqa: E402


@pytest.fixture
def slide_id():
    return ObjectId("5f2b7c9e8d1a4b3c2e1f0a9b")


@pytest.fixture
def slide_doc(slide_id):
    """Slide as stored: native ObjectId, nested metadata, batch membership."""
    return {
        "_id": slide_id,
        "name": "TCGA-02-0001",
        "location": "/data/images/TCGA-02-0001.svs",
        "mpp": 0.25,
        "collections": ["old-batch", "all"],
        "meta": {"stain": "H&E", "tags": ["brain"]},
        "create_date": "2020-08-06T10:00:00Z",
    }


@pytest.fixture
def roi_docs():
    """Two ROIs on the source slide, ids stored as hex strings."""
    return [
        {
            "_id": "6000000000000000000000a1",
            "creator": "alice",
            "provenance": {"image": {"slide": "5f2b7c9e8d1a4b3c2e1f0a9b"}, "analysis": {"execution_id": "human"}},
            "annotations": [{"label": "tumor"}],
            "create_date": "2020-08-06T10:00:00Z",
        },
        {
            "_id": "6000000000000000000000a2",
            "creator": "bob",
            "provenance": {"image": {"slide": "5f2b7c9e8d1a4b3c2e1f0a9b"}, "analysis": {"execution_id": "human"}},
            "annotations": [{"label": "stroma"}, {"label": "necrosis"}],
            "create_date": "2020-08-06T10:00:00Z",
        },
    ]
