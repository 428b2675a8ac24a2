# concierge/runtime/nodes/safety_override.py
from __future__ import annotations

from typing import Any, Dict

from pocketflow import AsyncNode

from concierge.services.guardrails import ryan_safety_override_reply
from concierge.services.personas import SAFETY_PERSONA_ID


class SafetyOverrideNode(AsyncNode):
    """Terminal node for guardrail hits: Dr. Ryan's urgent-care reply."""

    async def prep_async(self, shared: Dict[str, Any]) -> Dict[str, Any]:
        guard = shared.get("guardrail")
        return {
            "user_text": shared.get("user_last", ""),
            "reply": getattr(guard, "reply", None),
        }

    async def exec_async(self, prep: Dict[str, Any]) -> Dict[str, Any]:
        return {"reply": prep["reply"] or ryan_safety_override_reply(prep["user_text"])}

    async def post_async(self, shared: Dict[str, Any], prep: Dict[str, Any], exec_res: Dict[str, Any]) -> str:
        shared["assistant_reply"] = exec_res["reply"]
        shared["used"] = "safety_override"
        shared["persona_id_used"] = SAFETY_PERSONA_ID
        shared["escalated"] = None
        return "ok"
