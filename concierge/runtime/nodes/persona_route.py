# concierge/runtime/nodes/persona_route.py
from __future__ import annotations

import logging
from typing import Any, Dict

from pocketflow import AsyncNode

from concierge.services.personas import DEFAULT_REGISTRY
from concierge.services.routing import RouteDecision, route_persona_id
from concierge.telemetry import log_event

logger = logging.getLogger("concierge.runtime.route")


class PersonaRouteNode(AsyncNode):
    """
    Resolve which persona answers and whether a model is available.
    - exec_async: scope escalation (pure)
    - post_async: routes ``model`` when an LLM client is present, else ``no_client``
    """

    async def prep_async(self, shared: Dict[str, Any]) -> Dict[str, Any]:
        return {
            "requested": shared.get("persona_id_requested"),
            "user_text": shared.get("user_last", ""),
            "registry": shared.get("registry") or DEFAULT_REGISTRY,
            "has_client": shared.get("llm_client") is not None,
        }

    async def exec_async(self, prep: Dict[str, Any]) -> RouteDecision:
        return route_persona_id(prep["requested"], prep["user_text"], registry=prep["registry"])

    async def post_async(self, shared: Dict[str, Any], prep: Dict[str, Any], exec_res: RouteDecision) -> str:
        shared["persona_id_used"] = exec_res.persona_id
        shared["escalated"] = exec_res.reason
        if exec_res.reason:
            log_event(
                logger,
                "persona_escalated",
                personaIdRequested=prep["requested"],
                personaIdUsed=exec_res.persona_id,
                reason=exec_res.reason,
            )
        return "model" if prep["has_client"] else "no_client"
