from typing import Protocol

from documents.domain.entities import Document


class MetadataIndex(Protocol):
    """Fast remote index: one record per document, version bodies stripped."""

    async def list_for_owner(self, owner_id: str) -> list[Document]: ...

    async def get(self, owner_id: str, document_id: str) -> Document | None:
        """Live content with version summaries; returned as live-only."""
        ...

    async def put(self, owner_id: str, document: Document) -> None: ...

    async def delete(self, owner_id: str, document_id: str) -> None: ...


class BlobStore(Protocol):
    """Bulk remote store holding serialized documents with full history."""

    async def get(self, key: str) -> bytes | None: ...

    async def put(self, key: str, payload: bytes) -> None: ...

    async def delete(self, key: str) -> bool: ...


def blob_key(owner_id: str, document_id: str) -> str:
    return f"documents/{owner_id}/{document_id}.json"
