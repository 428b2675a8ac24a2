# concierge/runtime/flow.py
from __future__ import annotations

from typing import Any, Dict, Optional

from pocketflow import AsyncFlow

from concierge.config import Settings
from concierge.runtime.nodes.booking_hint import BookingHintNode
from concierge.runtime.nodes.completion import CompletionNode
from concierge.runtime.nodes.intake import IntakeNode
from concierge.runtime.nodes.local_fallback import LocalFallbackNode
from concierge.runtime.nodes.persona_route import PersonaRouteNode
from concierge.runtime.nodes.safety_gate import SafetyGateNode
from concierge.runtime.nodes.safety_override import SafetyOverrideNode
from concierge.services.personas import DEFAULT_REGISTRY, PersonaRegistry


def make_chat_flow() -> AsyncFlow:
    """Persona chat flow:
    intake → safety_gate → (override → safety_override)
                         → (clear → persona_route → (no_client → local_fallback → booking_hint)
                                                  → (model → completion → (ok → booking_hint)
                                                                         → (degraded → local_fallback → booking_hint)))
    """

    # Instantiate all nodes
    intake = IntakeNode()
    safety_gate = SafetyGateNode()
    safety_override = SafetyOverrideNode()
    persona_route = PersonaRouteNode()
    completion = CompletionNode()
    local_fallback = LocalFallbackNode()
    booking_hint = BookingHintNode()

    # --- Routing setup ---

    intake.successors = {"ok": safety_gate}

    # 1. safety gate always runs first
    safety_gate.successors = {
        "override": safety_override,
        "clear": persona_route,
    }

    # 2. model or local reply
    persona_route.successors = {
        "model": completion,
        "no_client": local_fallback,
    }
    completion.successors = {
        "ok": booking_hint,
        "degraded": local_fallback,
    }
    local_fallback.successors = {"ok": booking_hint}

    # --- Flow entry point ---
    return AsyncFlow(start=intake)


def new_shared(
    *,
    persona_id: str,
    messages: list,
    module: Optional[str] = None,
    registry: Optional[PersonaRegistry] = None,
    settings: Optional[Settings] = None,
    llm_client: Any = None,
) -> Dict[str, Any]:
    """Fresh per-request state for ``make_chat_flow``."""
    return {
        "persona_id_requested": persona_id,
        "module": module,
        "messages": list(messages),
        "registry": registry or DEFAULT_REGISTRY,
        "settings": settings or Settings(),
        "llm_client": llm_client,
    }


async def run_chat(**kwargs: Any) -> Dict[str, Any]:
    shared = new_shared(**kwargs)
    await make_chat_flow().run_async(shared)
    return shared
