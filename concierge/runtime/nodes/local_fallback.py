# concierge/runtime/nodes/local_fallback.py
from __future__ import annotations

from typing import Any, Dict

from pocketflow import AsyncNode

from concierge.services.fallback import local_fallback
from concierge.services.personas import DEFAULT_REGISTRY


class LocalFallbackNode(AsyncNode):
    """Templated persona reply used when no model answer is available."""

    async def prep_async(self, shared: Dict[str, Any]) -> Dict[str, Any]:
        return {
            "persona_id": shared.get("persona_id_used") or shared.get("persona_id_requested"),
            "user_text": shared.get("user_last", ""),
            "registry": shared.get("registry") or DEFAULT_REGISTRY,
        }

    async def exec_async(self, prep: Dict[str, Any]) -> Dict[str, Any]:
        return {"reply": local_fallback(prep["persona_id"], prep["user_text"], registry=prep["registry"])}

    async def post_async(self, shared: Dict[str, Any], prep: Dict[str, Any], exec_res: Dict[str, Any]) -> str:
        shared["assistant_reply"] = exec_res["reply"]
        shared["used"] = "fallback"
        return "ok"
