import logging

import httpx

from assistant.domain.entities import ChatMessage, ChatRole

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = """You are a helpful assistant integrated into a document management system.
You have access to the content of the document the user is currently viewing.
Use the provided Document Content to answer the user's questions.
If the answer is not in the document, state that clearly unless it's a general question about the document type.
Format your response using Markdown (bold, lists, code blocks) for better readability.

Document Content:
\"\"\"
{context}
\"\"\""""

APOLOGY = "Sorry, I encountered an error while processing your request. Please try again later."
CONFIGURATION_ERROR = "Configuration Error: Missing or invalid API key."
EMPTY_REPLY = "I couldn't generate a response."


class GeminiCompletionClient:
    """Generative Language REST client. Never raises; failures become reply text."""

    def __init__(
        self,
        api_key: str,
        model: str,
        base_url: str,
        timeout: float = 60.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.api_key = api_key
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.transport = transport

    async def generate(
        self, history: list[ChatMessage], document_text: str, user_message: str
    ) -> str:
        if not self.api_key:
            return CONFIGURATION_ERROR

        body = {
            "systemInstruction": {"parts": [{"text": SYSTEM_PROMPT.format(context=document_text)}]},
            "contents": [
                *(_to_content(m.role, m.text) for m in history),
                _to_content(ChatRole.USER, user_message),
            ],
        }

        try:
            async with httpx.AsyncClient(transport=self.transport, timeout=self.timeout) as client:
                response = await client.post(
                    f"{self.base_url}/models/{self.model}:generateContent",
                    headers={"x-goog-api-key": self.api_key},
                    json=body,
                )
                if response.status_code in (400, 401, 403) and "API key" in response.text:
                    logger.error("Completion API rejected the configured key")
                    return CONFIGURATION_ERROR
                response.raise_for_status()
                data = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            logger.error("Completion request failed: %s", exc)
            return APOLOGY

        return _extract_text(data) or EMPTY_REPLY


def _to_content(role: ChatRole, text: str) -> dict:
    return {
        "role": "user" if role == ChatRole.USER else "model",
        "parts": [{"text": text}],
    }


def _extract_text(data: dict) -> str:
    try:
        parts = data["candidates"][0]["content"]["parts"]
    except (KeyError, IndexError, TypeError):
        return ""
    return "".join(part.get("text", "") for part in parts)
