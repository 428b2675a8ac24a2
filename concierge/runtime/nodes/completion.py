# concierge/runtime/nodes/completion.py
from __future__ import annotations

import logging
from typing import Any, Dict, List

from pocketflow import AsyncNode

from concierge.config import Settings
from concierge.services.openai_client import CompletionError, CompletionOutcome, Degraded, Ok
from concierge.services.personas import DEFAULT_REGISTRY
from concierge.services.prompts import base_system_prompt
from concierge.telemetry import log_event, text_caps

logger = logging.getLogger("concierge.runtime.completion")


class CompletionNode(AsyncNode):
    """LLM call with a single attempt.
    - prep_async: fresh system prompt + filtered history + resolve client
    - exec_async: call the model; an empty reply counts as degraded
    - exec_fallback_async: any failure becomes ``Degraded(reason)``
    - post_async: ``ok`` on a usable reply, ``degraded`` otherwise
    """

    async def prep_async(self, shared: Dict[str, Any]) -> Dict[str, Any]:
        settings: Settings = shared.get("settings") or Settings()
        persona_id = shared.get("persona_id_used") or shared.get("persona_id_requested")

        system = base_system_prompt(
            persona_id,
            shared.get("module", "education"),
            registry=shared.get("registry") or DEFAULT_REGISTRY,
            site_name=settings.site_name,
            booking_url=settings.booking_url,
        )
        messages: List[Dict[str, str]] = [{"role": "system", "content": system}]
        messages.extend(
            {"role": m["role"], "content": m["content"]}
            for m in shared.get("history") or []
            if m.get("role") in ("user", "assistant")
        )

        return {
            "messages": messages,
            "client": shared["llm_client"],
            "temperature": settings.temperature,
        }

    async def exec_async(self, prep: Dict[str, Any]) -> CompletionOutcome:
        raw = await prep["client"].chat(messages=prep["messages"], temperature=prep["temperature"])
        text = (raw or "").strip()
        if not text:
            return Degraded("empty_content")
        return Ok(text)

    async def exec_fallback_async(self, prep: Dict[str, Any], exc: Exception) -> CompletionOutcome:
        if isinstance(exc, CompletionError):
            return Degraded(exc.reason, exc.status_code, str(exc))
        return Degraded("unexpected", detail=f"{type(exc).__name__}: {exc}")

    async def post_async(self, shared: Dict[str, Any], prep: Dict[str, Any], exec_res: CompletionOutcome) -> str:
        shared["completion"] = exec_res
        if isinstance(exec_res, Ok):
            shared["assistant_reply"] = exec_res.reply
            shared["used"] = "openai"
            return "ok"

        settings: Settings = shared.get("settings") or Settings()
        log_event(
            logger,
            "completion_degraded",
            level=logging.WARNING,
            caps=text_caps(settings.log_body_max),
            reason=exec_res.reason,
            status=exec_res.status_code,
            detail=exec_res.detail,
            personaIdUsed=shared.get("persona_id_used"),
        )
        return "degraded"
