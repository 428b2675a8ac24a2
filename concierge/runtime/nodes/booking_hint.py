# concierge/runtime/nodes/booking_hint.py
from __future__ import annotations

from typing import Any, Dict

from pocketflow import AsyncNode

from concierge.config import Settings
from concierge.services.booking import booking_cta_line, should_suggest_booking
from concierge.services.personas import DEFAULT_REGISTRY


class BookingHintNode(AsyncNode):
    """Append the online booking link when the user sounds ready to book."""

    async def prep_async(self, shared: Dict[str, Any]) -> Dict[str, Any]:
        settings: Settings = shared.get("settings") or Settings()
        registry = shared.get("registry") or DEFAULT_REGISTRY
        persona = registry.get(shared.get("persona_id_used"))
        return {
            "reply": str(shared.get("assistant_reply") or ""),
            "user_text": shared.get("user_last", ""),
            "triggers": persona.booking_triggers,
            "booking_url": settings.booking_url,
        }

    async def exec_async(self, prep: Dict[str, Any]) -> Dict[str, Any]:
        reply = prep["reply"]
        if should_suggest_booking(prep["user_text"], prep["triggers"]):
            reply = f"{reply}\n\n{booking_cta_line(prep['booking_url'])}"
        return {"reply": reply}

    async def post_async(self, shared: Dict[str, Any], prep: Dict[str, Any], exec_res: Dict[str, Any]) -> str:
        shared["assistant_reply"] = exec_res["reply"]
        return "ok"
