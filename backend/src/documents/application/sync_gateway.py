"""Cloud-first synchronization between the remote stores and the local cache.

Remote state is split in two: a metadata index (fast, one lightweight record per
document) and a blob store (slow, the full document with every version body).
The local cache holds the last known document list and account per owner.

Reads try the remote side first and fall back to the cache on any failure.
Writes commit to the cache first and then propagate to the remote side; the
local commit is never rolled back.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, replace

from accounts.domain.entities import Account
from accounts.domain.repository import AccountStore
from accounts.infrastructure.serialization import account_from_dict, account_to_dict
from documents.domain.entities import Document, Materialization
from documents.domain.repository import BlobStore, MetadataIndex, blob_key
from documents.domain.versioning import to_lite
from documents.infrastructure.serialization import (
    document_from_dict,
    document_from_json,
    document_to_dict,
    document_to_json,
)
from shared.exceptions import (
    DualWriteFailureError,
    MaterializationRequiredError,
    NotFoundError,
    OfflineError,
)
from shared.infrastructure.connectivity import Connectivity
from shared.infrastructure.local_cache import LocalCache, documents_key, profile_key
from shared.infrastructure.timeout import with_timeout

logger = logging.getLogger(__name__)

LoadStrategy = Callable[[str, str], Awaitable[Document | None]]


@dataclass(frozen=True)
class SyncOutcome:
    blob_synced: bool
    index_synced: bool

    @property
    def complete(self) -> bool:
        return self.blob_synced and self.index_synced


class SyncGateway:
    def __init__(
        self,
        index: MetadataIndex,
        blobs: BlobStore,
        accounts: AccountStore,
        cache: LocalCache,
        connectivity: Connectivity,
        read_timeout: float = 15.0,
        write_timeout: float = 30.0,
    ):
        self.index = index
        self.blobs = blobs
        self.accounts = accounts
        self.cache = cache
        self.connectivity = connectivity
        self.read_timeout = read_timeout
        self.write_timeout = write_timeout

    # --- documents ---

    async def list_documents(self, owner_id: str) -> list[Document]:
        if self.connectivity.online:
            try:
                documents = await with_timeout(
                    self.index.list_for_owner(owner_id), self.read_timeout, "document list"
                )
            except Exception as exc:
                logger.warning("Document list fetch failed, using cache: %s", exc)
            else:
                lite = [to_lite(d) for d in documents]
                self.cache.set(documents_key(owner_id), [document_to_dict(d) for d in lite])
                return lite

        return self._cached_documents(owner_id)

    async def load_full_document(self, owner_id: str, document_id: str) -> Document:
        strategies: list[tuple[str, LoadStrategy]] = [
            ("blob store", self._load_from_blob),
            ("metadata index", self._load_from_index),
            ("local cache", self._load_from_cache),
        ]
        for name, strategy in strategies:
            try:
                document = await strategy(owner_id, document_id)
            except Exception as exc:
                logger.warning("Loading %s from %s failed: %s", document_id, name, exc)
                continue
            if document is not None:
                logger.debug("Loaded %s from %s", document_id, name)
                return document

        raise NotFoundError("Document", document_id)

    async def save_document(self, owner_id: str, document: Document) -> SyncOutcome:
        if not document.has_history:
            raise MaterializationRequiredError(document.id)
        self.cache.upsert(documents_key(owner_id), document_to_dict(document))

        if not self.connectivity.online:
            raise OfflineError()

        blob_result, index_result = await asyncio.gather(
            with_timeout(
                self.blobs.put(blob_key(owner_id, document.id), document_to_json(document)),
                self.write_timeout,
                "blob upload",
            ),
            with_timeout(self.index.put(owner_id, document), self.read_timeout, "index write"),
            return_exceptions=True,
        )
        outcome = SyncOutcome(
            blob_synced=not isinstance(blob_result, BaseException),
            index_synced=not isinstance(index_result, BaseException),
        )

        if not outcome.blob_synced and not outcome.index_synced:
            logger.error(
                "Sync of %s failed on both channels: blob=%s index=%s",
                document.id, blob_result, index_result,
            )
            raise DualWriteFailureError()
        if not outcome.blob_synced:
            logger.warning("Blob upload of %s failed, index updated: %s", document.id, blob_result)
        if not outcome.index_synced:
            logger.warning("Index write of %s failed, blob uploaded: %s", document.id, index_result)
        return outcome

    async def delete_document(self, owner_id: str, document_id: str) -> None:
        self.cache.remove(documents_key(owner_id), document_id)

        if not self.connectivity.online:
            return

        try:
            if not await with_timeout(
                self.blobs.delete(blob_key(owner_id, document_id)), self.read_timeout, "blob delete"
            ):
                logger.debug("No blob stored for %s", document_id)
        except Exception as exc:
            logger.warning("Blob delete of %s ignored: %s", document_id, exc)

        try:
            await with_timeout(
                self.index.delete(owner_id, document_id), self.read_timeout, "index delete"
            )
        except Exception as exc:
            logger.error("Index delete of %s failed: %s", document_id, exc)

    # --- accounts ---

    async def get_account(self, owner_id: str) -> Account | None:
        if self.connectivity.online:
            try:
                account = await with_timeout(
                    self.accounts.get(owner_id), self.read_timeout, "account fetch"
                )
            except Exception as exc:
                logger.warning("Account fetch failed, using cache: %s", exc)
            else:
                if account is not None:
                    self.cache.set(profile_key(owner_id), account_to_dict(account))
                return account

        data = self.cache.get(profile_key(owner_id))
        return account_from_dict(data) if data else None

    async def save_account(self, account: Account) -> None:
        self.cache.set(profile_key(account.id), account_to_dict(account))

        if not self.connectivity.online:
            return

        try:
            await with_timeout(self.accounts.put(account), self.read_timeout, "account save")
        except Exception as exc:
            logger.warning("Account save for %s not synced: %s", account.id, exc)

    # --- load strategies ---

    async def _load_from_blob(self, owner_id: str, document_id: str) -> Document | None:
        if not self.connectivity.online:
            raise OfflineError()
        payload = await with_timeout(
            self.blobs.get(blob_key(owner_id, document_id)), self.read_timeout, "blob download"
        )
        if payload is None:
            return None
        document = replace(document_from_json(payload), materialization=Materialization.FULL)
        self.cache.upsert(documents_key(owner_id), document_to_dict(document))
        return document

    async def _load_from_index(self, owner_id: str, document_id: str) -> Document | None:
        if not self.connectivity.online:
            raise OfflineError()
        document = await with_timeout(
            self.index.get(owner_id, document_id), self.read_timeout, "index read"
        )
        if document is None:
            return None

        # the index only carries version summaries; bodies are immutable per id,
        # so a cached full record can supply them
        cached = self._cached_full(owner_id, document_id)
        bodies = {v.id: v.content for v in cached.versions} if cached else {}
        if any(v.id not in bodies for v in document.versions):
            logger.info("History of %s not available locally, serving live content only", document_id)
            return replace(document, materialization=Materialization.LIVE_ONLY)

        document = replace(
            document,
            versions=[replace(v, content=bodies[v.id]) for v in document.versions],
            materialization=Materialization.FULL,
        )
        self.cache.upsert(documents_key(owner_id), document_to_dict(document))
        return document

    async def _load_from_cache(self, owner_id: str, document_id: str) -> Document | None:
        return self._cached_full(owner_id, document_id)

    # --- cache helpers ---

    def _cached_documents(self, owner_id: str) -> list[Document]:
        data = self.cache.get(documents_key(owner_id)) or []
        return [document_from_dict(item) for item in data]

    def _cached_full(self, owner_id: str, document_id: str) -> Document | None:
        for document in self._cached_documents(owner_id):
            if document.id == document_id and document.has_history:
                return document
        return None
