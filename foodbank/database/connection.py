# file: database/connection.py

from typing import Any, List, NamedTuple, Optional, Protocol, Sequence

from firebase_admin import firestore_async
from google.cloud.firestore_v1 import DELETE_FIELD
from google.cloud.firestore_v1.base_query import FieldFilter

from foodbank.services.firebase_app import initialize_firebase


class QueryFilter(NamedTuple):
    field: str
    op: str
    value: Any


class Document(NamedTuple):
    id: str
    data: dict


class DocumentSource(Protocol):
    """Read access to the document store, plus the one write used by token cleanup."""

    async def query(self, collection: str, filters: Sequence[QueryFilter]) -> List[Document]:
        ...

    async def get(self, collection: str, doc_id: str) -> Optional[Document]:
        ...

    async def delete_field(self, collection: str, doc_id: str, field: str) -> None:
        ...


class FirestoreDocumentSource:
    def __init__(self, client):
        self._client = client

    async def query(self, collection: str, filters: Sequence[QueryFilter]) -> List[Document]:
        query = self._client.collection(collection)
        for f in filters:
            query = query.where(filter=FieldFilter(f.field, f.op, f.value))
        snapshots = await query.get()
        return [Document(snap.id, snap.to_dict() or {}) for snap in snapshots]

    async def get(self, collection: str, doc_id: str) -> Optional[Document]:
        snap = await self._client.collection(collection).document(doc_id).get()
        if not snap.exists:
            return None
        return Document(snap.id, snap.to_dict() or {})

    async def delete_field(self, collection: str, doc_id: str, field: str) -> None:
        await self._client.collection(collection).document(doc_id).update({field: DELETE_FIELD})


def get_document_source() -> DocumentSource:
    app = initialize_firebase()
    return FirestoreDocumentSource(firestore_async.client(app))
