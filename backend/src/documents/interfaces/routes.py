from dataclasses import asdict

from fastapi import APIRouter, Depends, File, UploadFile

from accounts.domain.entities import Account
from auth.domain.entities import Identity
from documents.application.services import (
    DocumentChange,
    create_document,
    edit_document,
    list_documents,
    open_document,
    remove_document,
    restore_document,
    toggle_document_auto_update,
)
from documents.application.sync_gateway import SyncGateway
from documents.domain.entities import Document
from documents.interfaces.schemas import (
    DocumentChangeResponse,
    DocumentResponse,
    DocumentSummaryResponse,
    EditDocumentRequest,
    ImportDocumentRequest,
    RestoreVersionRequest,
)
from ingestion.application.services import ingest_import, ingest_upload
from shared.dependencies import get_current_account, get_current_identity, get_gateway
from shared.exceptions import PolicyViolationError

router = APIRouter(prefix="/api/documents", tags=["documents"])

MAX_UPLOAD_SIZE = 10 * 1024 * 1024


def _summary(document: Document) -> DocumentSummaryResponse:
    return DocumentSummaryResponse(
        id=document.id,
        title=document.title,
        kind=document.kind,
        owner_id=document.owner_id,
        last_updated=document.last_updated,
        auto_update_enabled=document.auto_update_enabled,
        materialization=document.materialization,
        version_count=len(document.versions),
    )


def _change(change: DocumentChange) -> DocumentChangeResponse:
    return DocumentChangeResponse(
        document=DocumentResponse.model_validate(asdict(change.document)),
        sync_status=change.sync_status,
        edits_used=change.account.edits_used if change.account else None,
    )


@router.get("/", response_model=list[DocumentSummaryResponse])
async def list_all(
    identity: Identity = Depends(get_current_identity),
    gateway: SyncGateway = Depends(get_gateway),
):
    return [_summary(d) for d in await list_documents(gateway, identity.owner_id)]


@router.post("/upload", response_model=DocumentChangeResponse, status_code=201)
async def upload(
    file: UploadFile = File(...),
    account: Account = Depends(get_current_account),
    gateway: SyncGateway = Depends(get_gateway),
):
    data = await file.read(MAX_UPLOAD_SIZE + 1)
    if len(data) > MAX_UPLOAD_SIZE:
        raise PolicyViolationError(
            f"File too large. Maximum size is {MAX_UPLOAD_SIZE // (1024 * 1024)} MB"
        )
    document = ingest_upload(account.id, file.filename or "untitled.txt", data)
    return _change(await create_document(gateway, account, document))


@router.post("/import", response_model=DocumentChangeResponse, status_code=201)
async def import_document(
    body: ImportDocumentRequest,
    account: Account = Depends(get_current_account),
    gateway: SyncGateway = Depends(get_gateway),
):
    document = ingest_import(account.id, body.title, body.kind, body.content)
    return _change(await create_document(gateway, account, document))


@router.get("/{document_id}", response_model=DocumentResponse)
async def get_one(
    document_id: str,
    identity: Identity = Depends(get_current_identity),
    gateway: SyncGateway = Depends(get_gateway),
):
    return await open_document(gateway, identity.owner_id, document_id)


@router.put("/{document_id}/content", response_model=DocumentChangeResponse)
async def edit(
    document_id: str,
    body: EditDocumentRequest,
    account: Account = Depends(get_current_account),
    gateway: SyncGateway = Depends(get_gateway),
):
    change = await edit_document(
        gateway, account, document_id, body.content, is_auto_save=body.is_auto_save
    )
    return _change(change)


@router.post("/{document_id}/restore", response_model=DocumentChangeResponse)
async def restore(
    document_id: str,
    body: RestoreVersionRequest,
    identity: Identity = Depends(get_current_identity),
    gateway: SyncGateway = Depends(get_gateway),
):
    change = await restore_document(gateway, identity.owner_id, document_id, body.version_id)
    return _change(change)


@router.post("/{document_id}/auto-update", response_model=DocumentChangeResponse)
async def toggle_auto_update(
    document_id: str,
    identity: Identity = Depends(get_current_identity),
    gateway: SyncGateway = Depends(get_gateway),
):
    return _change(await toggle_document_auto_update(gateway, identity.owner_id, document_id))


@router.delete("/{document_id}", status_code=204)
async def delete(
    document_id: str,
    identity: Identity = Depends(get_current_identity),
    gateway: SyncGateway = Depends(get_gateway),
):
    await remove_document(gateway, identity.owner_id, document_id)
