import asyncio
from dataclasses import replace
from datetime import datetime, timezone

import jwt
import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

import accounts.infrastructure.models  # noqa: F401
import documents.infrastructure.models  # noqa: F401
from accounts.domain.entities import Account
from assistant.domain.entities import ChatMessage
from documents.application.sync_gateway import SyncGateway
from documents.domain.entities import Document, DocumentKind, Materialization, Version
from documents.domain.versioning import strip_version_bodies, to_lite
from main import app
from shared.config import settings
from shared.dependencies import get_completion_client, get_gateway
from shared.infrastructure.connectivity import Connectivity
from shared.infrastructure.database import Base
from shared.infrastructure.local_cache import create_local_cache


class _Remote:
    """Failure injection shared by the in-memory remote stores."""

    def __init__(self):
        self.error: Exception | None = None
        self.delay = 0.0
        self.calls = 0

    async def _remote_call(self) -> None:
        self.calls += 1
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error


class FakeMetadataIndex(_Remote):
    def __init__(self):
        super().__init__()
        self.records: dict[tuple[str, str], Document] = {}

    async def list_for_owner(self, owner_id: str) -> list[Document]:
        await self._remote_call()
        documents = [d for (owner, _), d in self.records.items() if owner == owner_id]
        documents.sort(key=lambda d: d.last_updated, reverse=True)
        return [to_lite(d) for d in documents]

    async def get(self, owner_id: str, document_id: str) -> Document | None:
        await self._remote_call()
        return self.records.get((owner_id, document_id))

    async def put(self, owner_id: str, document: Document) -> None:
        await self._remote_call()
        self.records[(owner_id, document.id)] = replace(
            document,
            versions=strip_version_bodies(document.versions),
            materialization=Materialization.LIVE_ONLY,
        )

    async def delete(self, owner_id: str, document_id: str) -> None:
        await self._remote_call()
        self.records.pop((owner_id, document_id), None)


class FakeBlobStore(_Remote):
    def __init__(self):
        super().__init__()
        self.objects: dict[str, bytes] = {}

    async def get(self, key: str) -> bytes | None:
        await self._remote_call()
        return self.objects.get(key)

    async def put(self, key: str, payload: bytes) -> None:
        await self._remote_call()
        self.objects[key] = payload

    async def delete(self, key: str) -> bool:
        await self._remote_call()
        return self.objects.pop(key, None) is not None


class FakeAccountStore(_Remote):
    def __init__(self):
        super().__init__()
        self.accounts: dict[str, Account] = {}

    async def get(self, account_id: str) -> Account | None:
        await self._remote_call()
        return self.accounts.get(account_id)

    async def put(self, account: Account) -> None:
        await self._remote_call()
        self.accounts[account.id] = account


class FakeCompletionClient:
    def __init__(self, reply: str = "It is a plan."):
        self.reply = reply
        self.requests: list[tuple[list[ChatMessage], str, str]] = []

    async def generate(self, history, document_text, user_message) -> str:
        self.requests.append((history, document_text, user_message))
        return self.reply


OWNER_ID = "user-1"


def make_document(
    content: str = "A",
    versions: list[Version] | None = None,
    owner_id: str = OWNER_ID,
    document_id: str = "doc-1",
    title: str = "Notes.txt",
    last_updated: datetime | None = None,
) -> Document:
    return Document(
        id=document_id,
        title=title,
        kind=DocumentKind.TEXT,
        owner_id=owner_id,
        current_content=content,
        last_updated=last_updated or datetime(2026, 1, 1, tzinfo=timezone.utc),
        versions=versions or [],
    )


def make_token(
    sub: str = OWNER_ID, email_verified: bool = True, secret: str | None = None
) -> str:
    payload = {
        "sub": sub,
        "name": "Alice Smith",
        "email": "alice@example.com",
        "email_verified": email_verified,
    }
    return jwt.encode(payload, secret or settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


@pytest.fixture
def index():
    return FakeMetadataIndex()


@pytest.fixture
def blobs():
    return FakeBlobStore()


@pytest.fixture
def account_store():
    return FakeAccountStore()


@pytest.fixture
def cache():
    return create_local_cache("sqlite://")


@pytest.fixture
def connectivity():
    return Connectivity(online=True)


@pytest.fixture
def gateway(index, blobs, account_store, cache, connectivity):
    return SyncGateway(
        index=index,
        blobs=blobs,
        accounts=account_store,
        cache=cache,
        connectivity=connectivity,
        read_timeout=0.2,
        write_timeout=0.5,
    )


@pytest.fixture
def completion_client():
    return FakeCompletionClient()


@pytest.fixture
def auth_headers() -> dict:
    return {"Authorization": f"Bearer {make_token()}"}


@pytest.fixture(autouse=True)
def override_dependencies(gateway, completion_client):
    app.dependency_overrides[get_gateway] = lambda: gateway
    app.dependency_overrides[get_completion_client] = lambda: completion_client
    yield
    app.dependency_overrides.clear()


@pytest.fixture
async def client():
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
async def session_factory():
    engine = create_async_engine("sqlite+aiosqlite://", poolclass=StaticPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    await engine.dispose()
