from datetime import datetime, timedelta, timezone

from conftest import make_document
from documents.domain.entities import Materialization, Version
from documents.infrastructure.metadata_index import DbMetadataIndex

T0 = datetime(2026, 2, 1, 12, 0, tzinfo=timezone.utc)


async def test_put_keeps_version_summaries_only(session_factory):
    index = DbMetadataIndex(session_factory)
    doc = make_document(content="live", versions=[Version("v1", T0, "old", "Saved 12:00:00")])

    await index.put("user-1", doc)
    stored = await index.get("user-1", doc.id)

    assert stored.current_content == "live"
    assert stored.materialization == Materialization.LIVE_ONLY
    assert stored.versions == [Version("v1", T0, "", "Saved 12:00:00")]
    assert stored.last_updated == doc.last_updated


async def test_list_for_owner_is_lite_and_sorted(session_factory):
    index = DbMetadataIndex(session_factory)
    await index.put("user-1", make_document(document_id="a", last_updated=T0))
    await index.put("user-1", make_document(document_id="b", last_updated=T0 + timedelta(hours=1)))
    await index.put("user-2", make_document(document_id="c", owner_id="user-2"))

    documents = await index.list_for_owner("user-1")

    assert [d.id for d in documents] == ["b", "a"]
    assert all(d.materialization == Materialization.LITE for d in documents)
    assert all(d.current_content == "" for d in documents)


async def test_put_is_an_upsert(session_factory):
    index = DbMetadataIndex(session_factory)
    await index.put("user-1", make_document(content="one"))
    await index.put("user-1", make_document(content="two"))

    assert len(await index.list_for_owner("user-1")) == 1
    assert (await index.get("user-1", "doc-1")).current_content == "two"


async def test_delete(session_factory):
    index = DbMetadataIndex(session_factory)
    await index.put("user-1", make_document())

    await index.delete("user-1", "doc-1")

    assert await index.get("user-1", "doc-1") is None


async def test_same_id_for_different_owners(session_factory):
    index = DbMetadataIndex(session_factory)
    await index.put("user-1", make_document(content="mine"))
    await index.put("user-2", make_document(content="theirs", owner_id="user-2"))

    assert (await index.get("user-1", "doc-1")).current_content == "mine"
    assert (await index.get("user-2", "doc-1")).current_content == "theirs"
