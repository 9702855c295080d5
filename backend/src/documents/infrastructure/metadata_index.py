from datetime import datetime, timezone

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from documents.domain.entities import Document, DocumentKind, Materialization, Version
from documents.infrastructure.models import DocumentIndexModel
from shared.infrastructure.timestamps import as_utc


class DbMetadataIndex:
    """Document index rows keyed by owner and document id.

    Rows mirror the live content but only a summary of each version.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self.session_factory = session_factory

    async def list_for_owner(self, owner_id: str) -> list[Document]:
        async with self.session_factory() as session:
            result = await session.execute(
                select(DocumentIndexModel)
                .where(DocumentIndexModel.owner_id == owner_id)
                .order_by(DocumentIndexModel.last_updated.desc())
            )
            return [_to_entity(m, lite=True) for m in result.scalars().all()]

    async def get(self, owner_id: str, document_id: str) -> Document | None:
        async with self.session_factory() as session:
            model = await session.get(DocumentIndexModel, (owner_id, document_id))
            return _to_entity(model, lite=False) if model else None

    async def put(self, owner_id: str, document: Document) -> None:
        async with self.session_factory() as session:
            await session.merge(
                DocumentIndexModel(
                    owner_id=owner_id,
                    id=document.id,
                    title=document.title,
                    kind=document.kind.value,
                    current_content=document.current_content,
                    last_updated=document.last_updated,
                    auto_update_enabled=document.auto_update_enabled,
                    version_history=[_version_summary(v) for v in document.versions],
                    last_synced=datetime.now(timezone.utc),
                )
            )
            await session.commit()

    async def delete(self, owner_id: str, document_id: str) -> None:
        async with self.session_factory() as session:
            await session.execute(
                delete(DocumentIndexModel).where(
                    DocumentIndexModel.owner_id == owner_id,
                    DocumentIndexModel.id == document_id,
                )
            )
            await session.commit()


def _version_summary(version: Version) -> dict:
    return {
        "id": version.id,
        "timestamp": version.timestamp.isoformat(),
        "label": version.label,
    }


def _to_entity(model: DocumentIndexModel, lite: bool) -> Document:
    versions = [
        Version(
            id=item["id"],
            timestamp=as_utc(datetime.fromisoformat(item["timestamp"])),
            content="",
            label=item["label"],
        )
        for item in model.version_history or []
    ]
    return Document(
        id=model.id,
        title=model.title,
        kind=DocumentKind(model.kind),
        owner_id=model.owner_id,
        current_content="" if lite else model.current_content,
        last_updated=as_utc(model.last_updated),
        versions=versions,
        auto_update_enabled=model.auto_update_enabled,
        materialization=Materialization.LITE if lite else Materialization.LIVE_ONLY,
    )
