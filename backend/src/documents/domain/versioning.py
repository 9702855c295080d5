"""Version history rules.

Every function here returns new values and leaves its inputs untouched. Versions
hold pre-images: the content that was live right before the change that created
them. History is ordered oldest first and capped at MAX_VERSIONS.
"""

import uuid
from dataclasses import dataclass, replace
from datetime import datetime, timezone

from documents.domain.entities import Document, DocumentKind, Materialization, Version
from shared.exceptions import MaterializationRequiredError, NotFoundError

MAX_VERSIONS = 10
AUTO_SAVE_LABEL = "Auto-Save"
MANUAL_SAVE_LABEL = "Saved"
BACKUP_LABEL = "Pre-Restore Backup"


@dataclass(frozen=True)
class EditResult:
    document: Document
    edits_used: int


def _resolve_now(now: datetime | None) -> datetime:
    return now or datetime.now(timezone.utc)


def _local_time(timestamp: datetime) -> str:
    return timestamp.astimezone().strftime("%H:%M:%S")


def _snapshot(content: str, label: str, timestamp: datetime) -> Version:
    return Version(id=uuid.uuid4().hex, timestamp=timestamp, content=content, label=label)


def _require_history(doc: Document) -> None:
    # version bodies must be loaded before history is read or rewritten
    if not doc.has_history:
        raise MaterializationRequiredError(doc.id)


def new_document(
    owner_id: str,
    title: str,
    kind: DocumentKind,
    content: str,
    auto_update_enabled: bool = False,
    now: datetime | None = None,
) -> Document:
    return Document(
        id=uuid.uuid4().hex,
        title=title,
        kind=kind,
        owner_id=owner_id,
        current_content=content,
        last_updated=_resolve_now(now),
        versions=[],
        auto_update_enabled=auto_update_enabled,
    )


def prune_history(versions: list[Version], limit: int = MAX_VERSIONS) -> list[Version]:
    if len(versions) <= limit:
        return list(versions)
    return list(versions[len(versions) - limit:])


def apply_edit(
    doc: Document,
    new_content: str,
    is_auto_save: bool,
    edits_used: int,
    now: datetime | None = None,
) -> EditResult:
    """Replace the live content, keeping the old content as the newest version.

    The returned edits_used is what the account counter should become; auto-saves
    leave it alone.
    """
    _require_history(doc)
    timestamp = _resolve_now(now)
    prefix = AUTO_SAVE_LABEL if is_auto_save else MANUAL_SAVE_LABEL
    pre_image = _snapshot(doc.content, f"{prefix} {_local_time(timestamp)}", timestamp)

    updated = replace(
        doc,
        current_content=new_content,
        last_updated=timestamp,
        versions=prune_history([*doc.versions, pre_image]),
        materialization=Materialization.FULL,
    )
    return EditResult(document=updated, edits_used=edits_used if is_auto_save else edits_used + 1)


def restore_version(doc: Document, version_id: str, now: datetime | None = None) -> Document:
    _require_history(doc)
    target = doc.find_version(version_id)
    if target is None:
        raise NotFoundError("Version", version_id)

    timestamp = _resolve_now(now)
    # restoring content identical to the live content still records a backup
    backup = _snapshot(doc.content, BACKUP_LABEL, timestamp)

    return replace(
        doc,
        current_content=target.content,
        last_updated=timestamp,
        versions=prune_history([*doc.versions, backup]),
        materialization=Materialization.FULL,
    )


def toggle_auto_update(doc: Document) -> Document:
    return replace(doc, auto_update_enabled=not doc.auto_update_enabled)


def display_content(doc: Document, version_id: str | None = None) -> str:
    """Content shown for the live document or one of its historical versions."""
    live = doc.content
    if version_id is None:
        return live
    _require_history(doc)
    version = doc.find_version(version_id)
    if version is None:
        raise NotFoundError("Version", version_id)
    return version.content


def strip_version_bodies(versions: list[Version]) -> list[Version]:
    return [replace(v, content="") for v in versions]


def to_lite(doc: Document) -> Document:
    return replace(
        doc,
        current_content="",
        versions=strip_version_bodies(doc.versions),
        materialization=Materialization.LITE,
    )
