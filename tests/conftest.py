# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-09-26
# Description: conftest.py
# -----------------------------------------------------------------------------

import os
import sys
from pathlib import Path
from typing import List, Optional, Sequence

import pytest

# add project root to sys.path
ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

# Read by settings / logging_utils at import time
os.environ.setdefault("RETAIL_MOUNT_UI", "0")
os.environ.setdefault("RETAIL_LOG_TO_FILE", "0")

from persistence.RetailDatabase import RetailDatabase  # noqa: E402
from persistence.models import Account  # noqa: E402
from searchindex.RetailIndexAdapter import RetailIndexAdapter  # noqa: E402

TEST_ACCOUNT_ID = "test-account"
FAKE_DIMENSIONS = 4

SAMPLE_DOCS = [
    {
        "invoice": "489434", "stockCode": "85048", "description": "15CM CHRISTMAS GLASS BALL 20 LIGHTS",
        "quantity": 12, "invoiceDate": "2009-12-01T07:45:00", "price": 6.95,
        "customerId": "13085", "country": "United Kingdom",
    },
    {
        "invoice": "489434", "stockCode": "79323P", "description": "PINK CHERRY LIGHTS",
        "quantity": 12, "invoiceDate": "2009-12-01T07:45:00", "price": 6.75,
        "customerId": "13085", "country": "United Kingdom",
    },
    {
        "invoice": "489435", "stockCode": "22350", "description": "CAT BOWL",
        "quantity": 12, "invoiceDate": "2009-12-01T07:46:00", "price": 2.55,
        "customerId": "13085", "country": "United Kingdom",
    },
    {
        "invoice": "489436", "stockCode": "21232", "description": "STRAWBERRY CERAMIC TRINKET BOX",
        "quantity": 24, "invoiceDate": "2009-12-05T09:06:00", "price": 1.25,
        "customerId": "12682", "country": "France",
    },
    {
        "invoice": "489437", "stockCode": "21232", "description": "STRAWBERRY CERAMIC TRINKET BOX",
        "quantity": 48, "invoiceDate": "2009-12-10T10:00:00", "price": 1.25,
        "customerId": "12583", "country": "France",
    },
    {
        "invoice": "489438", "stockCode": "84879", "description": "ASSORTED COLOUR BIRD ORNAMENT",
        "quantity": 160, "invoiceDate": "2010-01-15T11:30:00", "price": 1.69,
        "customerId": "15311", "country": "Germany",
    },
]


class FakeEmbedder:
    """
    Deterministic 4-d embedder: one axis per concept word found in the text.
    Text without any concept word embeds to None (like a failed provider call).
    """

    CONCEPTS = ("light", "strawberry", "bowl", "ornament")

    def __init__(self, dimensions: int = FAKE_DIMENSIONS) -> None:
        self.dimensions = dimensions
        self.calls: List[str] = []

    def embed_text(self, text: str) -> Optional[List[float]]:
        self.calls.append(text)
        lowered = (text or "").lower()
        vec = [1.0 if c in lowered else 0.0 for c in self.CONCEPTS]
        return vec if any(vec) else None

    def embed_texts(self, texts: Sequence[str]) -> Optional[List[List[float]]]:
        return [self.embed_text(t) or [0.0] * self.dimensions for t in texts]


@pytest.fixture
def database() -> RetailDatabase:
    db = RetailDatabase("sqlite://")
    db.create_all()
    yield db
    db.engine.dispose()


@pytest.fixture
def account(database: RetailDatabase) -> str:
    with database.session() as session:
        session.add(Account(account_id=TEST_ACCOUNT_ID))
    return TEST_ACCOUNT_ID


@pytest.fixture
def embedder() -> FakeEmbedder:
    return FakeEmbedder()


@pytest.fixture
def adapter(database: RetailDatabase, account: str, embedder: FakeEmbedder) -> RetailIndexAdapter:
    """Initialised adapter over SAMPLE_DOCS, each with a description embedding."""
    a = RetailIndexAdapter(account, database=database, embedder=embedder, embedding_dimensions=FAKE_DIMENSIONS)
    a.initialize()
    for doc in SAMPLE_DOCS:
        a.insert({**doc, "embeddings": embedder.embed_text(doc["description"])})
    embedder.calls.clear()
    return a
