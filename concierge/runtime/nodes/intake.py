# concierge/runtime/nodes/intake.py
from __future__ import annotations

from typing import Any, Dict, List

from pocketflow import AsyncNode

MODULES = ("education", "preconsult", "postcare")


def _as_dict(m: Any) -> Dict[str, str]:
    if isinstance(m, dict):
        return {"role": str(m.get("role", "")), "content": str(m.get("content") or "")}
    return {"role": str(getattr(m, "role", "")), "content": str(getattr(m, "content", "") or "")}


class IntakeNode(AsyncNode):
    """Normalize the incoming turn.
    - drops caller-supplied system messages (the system prompt is always rebuilt)
    - finds the most recent user message
    - defaults the module to education
    """

    async def prep_async(self, shared: Dict[str, Any]) -> Dict[str, Any]:
        return {
            "messages": [_as_dict(m) for m in shared.get("messages") or []],
            "module": shared.get("module"),
        }

    async def exec_async(self, prep: Dict[str, Any]) -> Dict[str, Any]:
        history: List[Dict[str, str]] = [m for m in prep["messages"] if m["role"] != "system"]
        user_last = next((m["content"] for m in reversed(history) if m["role"] == "user"), "")
        module = prep["module"] if prep["module"] in MODULES else "education"
        return {"history": history, "user_last": user_last, "module": module}

    async def post_async(self, shared: Dict[str, Any], prep: Dict[str, Any], exec_res: Dict[str, Any]) -> str:
        shared["history"] = exec_res["history"]
        shared["user_last"] = exec_res["user_last"]
        shared["module"] = exec_res["module"]
        return "ok"
