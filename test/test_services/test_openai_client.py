import json

import httpx
import pytest

from concierge.services.openai_client import CompletionError, OpenAIClient


def _client(handler) -> OpenAIClient:
    return OpenAIClient(
        base_url="https://llm.test/v1",
        api_key="sk-test",
        model="gpt-4o-mini",
        timeout=5.0,
        transport=httpx.MockTransport(handler),
    )


def _completion(content):
    return {"choices": [{"index": 0, "message": {"role": "assistant", "content": content}}]}


@pytest.mark.asyncio
async def test_chat_posts_payload_and_returns_content():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["path"] = request.url.path
        seen["auth"] = request.headers.get("authorization")
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json=_completion("Hi there"))

    async with _client(handler) as c:
        out = await c.chat(messages=[{"role": "user", "content": "hello"}], temperature=0.2)

    assert out == "Hi there"
    assert seen["path"] == "/v1/chat/completions"
    assert seen["auth"] == "Bearer sk-test"
    assert seen["body"]["model"] == "gpt-4o-mini"
    assert seen["body"]["temperature"] == 0.2
    assert seen["body"]["messages"] == [{"role": "user", "content": "hello"}]


@pytest.mark.asyncio
async def test_null_content_returns_empty_string():
    async with _client(lambda req: httpx.Response(200, json=_completion(None))) as c:
        assert await c.chat(messages=[]) == ""


@pytest.mark.asyncio
async def test_http_error_status():
    async with _client(lambda req: httpx.Response(500, text="upstream exploded")) as c:
        with pytest.raises(CompletionError) as ei:
            await c.chat(messages=[])
    assert ei.value.reason == "http_error"
    assert ei.value.status_code == 500


@pytest.mark.asyncio
async def test_timeout():
    def handler(request):
        raise httpx.ReadTimeout("too slow", request=request)

    async with _client(handler) as c:
        with pytest.raises(CompletionError) as ei:
            await c.chat(messages=[])
    assert ei.value.reason == "timeout"


@pytest.mark.asyncio
async def test_network_error():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    async with _client(handler) as c:
        with pytest.raises(CompletionError) as ei:
            await c.chat(messages=[])
    assert ei.value.reason == "network_error"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(200, text="not json"),
        httpx.Response(200, json={"choices": []}),
        httpx.Response(200, json=_completion(["not", "text"])),
        httpx.Response(200, json={"choices": [{"message": "hi"}]}),
        httpx.Response(200, json={"choices": [{"message": ["a", "b"]}]}),
        httpx.Response(200, json={"choices": ["hi"]}),
    ],
)
async def test_malformed_bodies_are_parse_errors(response):
    async with _client(lambda req: response) as c:
        with pytest.raises(CompletionError) as ei:
            await c.chat(messages=[])
    assert ei.value.reason == "parse_error"


def test_missing_key_is_rejected(monkeypatch):
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    with pytest.raises(CompletionError):
        OpenAIClient(base_url="https://llm.test/v1", api_key=None)
