import asyncio
import operator
from typing import Dict, Optional

import pytest

from foodbank.database.connection import Document
from foodbank.services.dispatcher import Dispatcher

OPS = {
    "==": operator.eq,
    ">": operator.gt,
    ">=": operator.ge,
    "<": operator.lt,
    "<=": operator.le,
}


class InMemoryDocumentSource:
    """Evaluates the same (field, op, value) filters the Firestore adapter receives."""

    def __init__(self, collections: Optional[Dict[str, Dict[str, dict]]] = None):
        self.collections = {name: dict(docs) for name, docs in (collections or {}).items()}
        self.queries = []
        self.deleted_fields = []

    async def query(self, collection, filters):
        self.queries.append((collection, list(filters)))
        matches = []
        for doc_id, data in self.collections.get(collection, {}).items():
            if all(
                data.get(f.field) is not None and OPS[f.op](data[f.field], f.value)
                for f in filters
            ):
                matches.append(Document(doc_id, dict(data)))
        return matches

    async def get(self, collection, doc_id):
        data = self.collections.get(collection, {}).get(doc_id)
        if data is None:
            return None
        return Document(doc_id, dict(data))

    async def delete_field(self, collection, doc_id, field):
        self.deleted_fields.append((collection, doc_id, field))
        self.collections[collection][doc_id].pop(field, None)


class FakePushGateway:
    """Records every send; tokens listed in `failures` raise the mapped exception."""

    def __init__(self, failures=None, delay: float = 0.0):
        self.failures = failures or {}
        self.delay = delay
        self.sent = []
        self.in_flight = 0
        self.max_in_flight = 0

    async def send(self, token, event):
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(self.delay)
            if token in self.failures:
                raise self.failures[token]
            self.sent.append((token, event))
            return f"projects/test/messages/{len(self.sent)}"
        finally:
            self.in_flight -= 1


@pytest.fixture
def store():
    return InMemoryDocumentSource()


@pytest.fixture
def gateway():
    return FakePushGateway()


@pytest.fixture
def dispatcher(gateway):
    return Dispatcher(gateway, max_concurrency=10, timeout=1.0)
