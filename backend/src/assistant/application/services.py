from assistant.domain.entities import ChatMessage, CompletionClient
from documents.application.sync_gateway import SyncGateway
from documents.domain.versioning import display_content


async def ask_document(
    gateway: SyncGateway,
    client: CompletionClient,
    owner_id: str,
    document_id: str,
    message: str,
    history: list[ChatMessage] | None = None,
    version_id: str | None = None,
) -> str:
    """Answer a question using the live content or a historical version as context."""
    document = await gateway.load_full_document(owner_id, document_id)
    context = display_content(document, version_id)
    return await client.generate(history or [], context, message)
