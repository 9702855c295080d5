import json

import httpx

from assistant.domain.entities import ChatMessage, ChatRole
from assistant.infrastructure.gemini_client import (
    APOLOGY,
    CONFIGURATION_ERROR,
    EMPTY_REPLY,
    GeminiCompletionClient,
)


def _client(handler, api_key: str = "test-key") -> GeminiCompletionClient:
    return GeminiCompletionClient(
        api_key=api_key,
        model="gemini-test",
        base_url="https://example.test/v1beta/",
        transport=httpx.MockTransport(handler),
    )


def _reply(text: str) -> dict:
    return {"candidates": [{"content": {"role": "model", "parts": [{"text": text}]}}]}


async def test_generate_sends_history_and_context():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["key"] = request.headers["x-goog-api-key"]
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json=_reply("Three items."))

    history = [
        ChatMessage(ChatRole.USER, "What is this?"),
        ChatMessage(ChatRole.MODEL, "A shopping list."),
    ]
    reply = await _client(handler).generate(history, "eggs\nmilk\nbread", "How many items?")

    assert reply == "Three items."
    assert seen["url"] == "https://example.test/v1beta/models/gemini-test:generateContent"
    assert seen["key"] == "test-key"
    contents = seen["body"]["contents"]
    assert [c["role"] for c in contents] == ["user", "model", "user"]
    assert contents[-1]["parts"][0]["text"] == "How many items?"
    assert "eggs\nmilk\nbread" in seen["body"]["systemInstruction"]["parts"][0]["text"]


async def test_missing_key_is_reported_without_request():
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(200, json=_reply("unused"))

    assert await _client(handler, api_key="").generate([], "doc", "hi") == CONFIGURATION_ERROR
    assert calls == []


async def test_rejected_key():
    def handler(request):
        return httpx.Response(400, json={"error": {"message": "API key not valid."}})

    assert await _client(handler).generate([], "doc", "hi") == CONFIGURATION_ERROR


async def test_server_error_becomes_apology():
    def handler(request):
        return httpx.Response(503, text="unavailable")

    assert await _client(handler).generate([], "doc", "hi") == APOLOGY


async def test_transport_error_becomes_apology():
    def handler(request):
        raise httpx.ConnectError("no route", request=request)

    assert await _client(handler).generate([], "doc", "hi") == APOLOGY


async def test_empty_candidates():
    def handler(request):
        return httpx.Response(200, json={"candidates": []})

    assert await _client(handler).generate([], "doc", "hi") == EMPTY_REPLY
