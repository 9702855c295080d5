import json
import logging
from typing import Any

from sqlalchemy import Engine, String, Text, create_engine
from sqlalchemy.orm import DeclarativeBase, Mapped, Session, mapped_column
from sqlalchemy.pool import StaticPool

logger = logging.getLogger(__name__)


def profile_key(owner_id: str) -> str:
    return f"profile_{owner_id}"


def documents_key(owner_id: str) -> str:
    return f"documents_{owner_id}"


class CacheBase(DeclarativeBase):
    pass


class CacheEntryModel(CacheBase):
    __tablename__ = "cache_entries"

    key: Mapped[str] = mapped_column(String(255), primary_key=True)
    value: Mapped[str] = mapped_column(Text, nullable=False)


class LocalCache:
    """Durable key-value cache on the local machine.

    Values are JSON documents. Every call is synchronous; callers on the event
    loop never suspend while touching the cache.
    """

    def __init__(self, engine: Engine):
        self.engine = engine
        CacheBase.metadata.create_all(engine)

    def get(self, key: str) -> Any | None:
        with Session(self.engine) as session:
            model = session.get(CacheEntryModel, key)
            if model is None:
                return None
            try:
                return json.loads(model.value)
            except ValueError:
                logger.warning("Discarding unreadable cache entry %s", key)
                return None

    def set(self, key: str, value: Any) -> None:
        with Session(self.engine) as session:
            session.merge(CacheEntryModel(key=key, value=json.dumps(value)))
            session.commit()

    def delete(self, key: str) -> None:
        with Session(self.engine) as session:
            model = session.get(CacheEntryModel, key)
            if model is not None:
                session.delete(model)
                session.commit()

    def upsert(self, key: str, item: dict, id_field: str = "id") -> None:
        """Replace the list element with the same id, or append it."""
        items = self.get(key) or []
        for index, existing in enumerate(items):
            if existing.get(id_field) == item[id_field]:
                items[index] = item
                break
        else:
            items.append(item)
        self.set(key, items)

    def remove(self, key: str, item_id: str, id_field: str = "id") -> None:
        items = self.get(key)
        if items is None:
            return
        self.set(key, [item for item in items if item.get(id_field) != item_id])


def create_local_cache(url: str) -> LocalCache:
    if url in ("sqlite://", "sqlite:///:memory:"):
        # one shared connection, otherwise every session sees an empty database
        engine = create_engine(
            url, poolclass=StaticPool, connect_args={"check_same_thread": False}
        )
    else:
        engine = create_engine(url)
    return LocalCache(engine)
