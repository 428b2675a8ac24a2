import json
import logging

import pytest
from pocketflow import AsyncFlow
from typing import Any, Dict, List

from concierge.config import Settings
from concierge.runtime.nodes.completion import CompletionNode
from concierge.services.openai_client import CompletionError, Degraded, Ok
from concierge.services.prompts import base_system_prompt


class FakeLLM:
    """Captures the last call and returns a canned reply (or raises)."""
    def __init__(self, reply: Any = "Botox usually lasts 3-4 months.") -> None:
        self.reply = reply
        self.calls: List[Dict[str, Any]] = []

    async def chat(self, *, messages: List[Dict[str, str]], temperature: float) -> str:
        self.calls.append({"messages": messages, "temperature": temperature})
        if isinstance(self.reply, Exception):
            raise self.reply
        return self.reply


def _shared(client, **extra):
    shared = {
        "persona_id_requested": "beau-tox",
        "persona_id_used": "beau-tox",
        "module": "education",
        "history": [
            {"role": "user", "content": "Hi"},
            {"role": "assistant", "content": "Hello! How can I help?"},
            {"role": "user", "content": "How long does Botox last?"},
        ],
        "settings": Settings(temperature=0.3, site_name="Test Spa"),
        "llm_client": client,
    }
    shared.update(extra)
    return shared


async def _run(shared):
    node = CompletionNode()
    flow = AsyncFlow(start=node)
    node.successors = {}  # end here for unit test
    return await flow.run_async(shared)


@pytest.mark.asyncio
async def test_completion_ok_sets_reply():
    llm = FakeLLM()
    shared = _shared(llm)
    action = await _run(shared)

    assert action == "ok"
    assert shared["assistant_reply"] == "Botox usually lasts 3-4 months."
    assert shared["used"] == "openai"
    assert isinstance(shared["completion"], Ok)

    call = llm.calls[0]
    assert call["temperature"] == 0.3
    assert call["messages"][0] == {
        "role": "system",
        "content": base_system_prompt("beau-tox", "education", site_name="Test Spa"),
    }
    assert [m["role"] for m in call["messages"][1:]] == ["user", "assistant", "user"]


@pytest.mark.asyncio
async def test_completion_error_is_degraded():
    shared = _shared(FakeLLM(CompletionError("http_error", "Upstream HTTP 500", status_code=500)))
    action = await _run(shared)

    assert action == "degraded"
    assert shared["completion"] == Degraded("http_error", 500, "Upstream HTTP 500")
    assert "assistant_reply" not in shared
    assert "used" not in shared


@pytest.mark.asyncio
async def test_unexpected_exception_is_degraded():
    shared = _shared(FakeLLM(RuntimeError("boom")))
    assert await _run(shared) == "degraded"
    assert shared["completion"].reason == "unexpected"
    assert "RuntimeError" in shared["completion"].detail


@pytest.mark.asyncio
@pytest.mark.parametrize("reply", ["", "   \n", None])
async def test_empty_reply_is_degraded(reply):
    shared = _shared(FakeLLM(reply))
    assert await _run(shared) == "degraded"
    assert shared["completion"] == Degraded("empty_content")


@pytest.mark.asyncio
async def test_prompt_follows_escalated_persona():
    llm = FakeLLM()
    await _run(_shared(llm, persona_id_used="ryan", module="postcare"))
    system = llm.calls[0]["messages"][0]["content"]
    assert system.startswith("You are Dr. Ryan")
    assert "Post-Treatment Care" in system


@pytest.mark.asyncio
async def test_degraded_log_caps_upstream_detail(caplog):
    detail = "Upstream HTTP 502: " + "x" * 200
    shared = _shared(
        FakeLLM(CompletionError("http_error", detail, status_code=502)),
        settings=Settings(log_body_max=20),
    )
    with caplog.at_level(logging.WARNING, logger="concierge.runtime.completion"):
        await _run(shared)

    payload = json.loads(caplog.records[-1].getMessage())
    assert payload["event"] == "completion_degraded"
    assert payload["reason"] == "http_error"
    assert payload["status"] == 502
    assert payload["detail"] == detail[:20] + "…"
