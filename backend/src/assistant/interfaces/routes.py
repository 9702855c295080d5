from fastapi import APIRouter, Depends

from assistant.application.services import ask_document
from assistant.domain.entities import ChatMessage, CompletionClient
from assistant.interfaces.schemas import ChatRequest, ChatResponse
from auth.domain.entities import Identity
from documents.application.sync_gateway import SyncGateway
from shared.dependencies import get_completion_client, get_current_identity, get_gateway

router = APIRouter(prefix="/api/documents", tags=["assistant"])


@router.post("/{document_id}/chat", response_model=ChatResponse)
async def chat(
    document_id: str,
    body: ChatRequest,
    identity: Identity = Depends(get_current_identity),
    gateway: SyncGateway = Depends(get_gateway),
    client: CompletionClient = Depends(get_completion_client),
):
    reply = await ask_document(
        gateway,
        client,
        owner_id=identity.owner_id,
        document_id=document_id,
        message=body.message,
        history=[ChatMessage(role=m.role, text=m.text) for m in body.history],
        version_id=body.version_id,
    )
    return ChatResponse(reply=reply)
