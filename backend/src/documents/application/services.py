import logging
from dataclasses import dataclass
from enum import StrEnum

from accounts.application.services import record_manual_edit
from accounts.domain.entities import Account
from documents.application.sync_gateway import SyncGateway
from documents.domain.entities import Document
from documents.domain.versioning import apply_edit, restore_version, toggle_auto_update
from quota.domain.policy import can_create_document, can_edit, limits_for
from shared.exceptions import OfflineError, QuotaExceededError

logger = logging.getLogger(__name__)


class SyncStatus(StrEnum):
    SYNCED = "synced"
    PARTIAL = "partial"
    PENDING = "pending"


@dataclass
class DocumentChange:
    document: Document
    sync_status: SyncStatus
    account: Account | None = None


async def _persist(gateway: SyncGateway, owner_id: str, document: Document) -> SyncStatus:
    """Save and translate the outcome for a soft notification.

    DualWriteFailureError is the only failure left to the caller.
    """
    try:
        outcome = await gateway.save_document(owner_id, document)
    except OfflineError:
        logger.info("Document %s saved locally, sync pending", document.id)
        return SyncStatus.PENDING
    return SyncStatus.SYNCED if outcome.complete else SyncStatus.PARTIAL


async def list_documents(gateway: SyncGateway, owner_id: str) -> list[Document]:
    return await gateway.list_documents(owner_id)


async def create_document(gateway: SyncGateway, account: Account, document: Document) -> DocumentChange:
    existing = await gateway.list_documents(account.id)
    if not can_create_document(account, len(existing)):
        raise QuotaExceededError(
            f"The {account.tier.value} tier allows {limits_for(account.tier).max_documents} documents"
        )
    status = await _persist(gateway, account.id, document)
    return DocumentChange(document=document, sync_status=status)


async def open_document(gateway: SyncGateway, owner_id: str, document_id: str) -> Document:
    return await gateway.load_full_document(owner_id, document_id)


async def edit_document(
    gateway: SyncGateway,
    account: Account,
    document_id: str,
    content: str,
    is_auto_save: bool = False,
) -> DocumentChange:
    if not is_auto_save and not can_edit(account):
        raise QuotaExceededError(
            f"Weekly manual edit limit reached for the {account.tier.value} tier"
        )

    document = await gateway.load_full_document(account.id, document_id)
    result = apply_edit(document, content, is_auto_save, account.edits_used)

    if not is_auto_save:
        account = await record_manual_edit(gateway, account, result.edits_used)

    status = await _persist(gateway, account.id, result.document)
    return DocumentChange(document=result.document, sync_status=status, account=account)


async def restore_document(
    gateway: SyncGateway, owner_id: str, document_id: str, version_id: str
) -> DocumentChange:
    document = await gateway.load_full_document(owner_id, document_id)
    restored = restore_version(document, version_id)
    status = await _persist(gateway, owner_id, restored)
    return DocumentChange(document=restored, sync_status=status)


async def toggle_document_auto_update(
    gateway: SyncGateway, owner_id: str, document_id: str
) -> DocumentChange:
    document = await gateway.load_full_document(owner_id, document_id)
    toggled = toggle_auto_update(document)
    status = await _persist(gateway, owner_id, toggled)
    return DocumentChange(document=toggled, sync_status=status)


async def remove_document(gateway: SyncGateway, owner_id: str, document_id: str) -> None:
    await gateway.delete_document(owner_id, document_id)
