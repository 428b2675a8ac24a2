# concierge/runtime/nodes/safety_gate.py
from __future__ import annotations

import logging
from typing import Any, Dict

from pocketflow import AsyncNode

from concierge.services import guardrails
from concierge.telemetry import log_event

logger = logging.getLogger("concierge.runtime.safety")


class SafetyGateNode(AsyncNode):
    """Runs the emergency / post-treatment lexicons before anything else.

    Routes ``override`` on a hit, ``clear`` otherwise. The selected persona
    plays no part in the decision.
    """

    async def prep_async(self, shared: Dict[str, Any]) -> Dict[str, Any]:
        return {
            "user_text": shared.get("user_last", ""),
            "module": shared.get("module", "education"),
        }

    async def exec_async(self, prep: Dict[str, Any]) -> guardrails.GuardrailResult:
        return guardrails.evaluate(prep["user_text"], prep["module"])

    async def post_async(self, shared: Dict[str, Any], prep: Dict[str, Any], exec_res: guardrails.GuardrailResult) -> str:
        shared["guardrail"] = exec_res
        if not exec_res.triggered:
            return "clear"
        # Reasons only; the message itself stays out of the logs
        log_event(
            logger,
            "guardrail_triggered",
            level=logging.WARNING,
            severity=exec_res.severity,
            reasons=list(exec_res.reasons),
            module=prep["module"],
            personaIdRequested=shared.get("persona_id_requested"),
        )
        return "override"
