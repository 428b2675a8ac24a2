# concierge/services/routing.py
"""Scope escalation: hand clinical questions from a service persona to Dr. Ryan."""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional, Pattern, Tuple

from concierge.services.personas import DEFAULT_REGISTRY, SAFETY_PERSONA_ID, PersonaRegistry


@dataclass(frozen=True)
class EscalationRule:
    pattern: Pattern[str]
    reason: str


@dataclass(frozen=True)
class RouteDecision:
    persona_id: str
    reason: Optional[str] = None


ESCALATION_RULES: Tuple[EscalationRule, ...] = tuple(
    EscalationRule(re.compile(p, re.I), r)
    for p, r in [
        (r"interact|blood thinner|warfarin|eliquis|\bmixing\b.*\b(with|and)\b|on (my )?medication|taking .*(medication|meds|pills)", "medication_interaction"),
        (r"pregnan|breastfeed|breast-feed|nursing|trying to conceive|fertility", "pregnancy"),
        (r"autoimmune|lupus|myasthenia|\bals\b|cancer|diabetes|heart condition|blood clot|bleeding disorder|keloid", "medical_condition"),
        (r"my (lab|labs|bloodwork|blood work|results) (say|show|came back)|testosterone (level|is)|estradiol|\bng/dl\b|\bpg/ml\b", "lab_results"),
    ]
)


def route_persona_id(
    requested_persona_id: Optional[str],
    user_text: str,
    *,
    registry: Optional[PersonaRegistry] = None,
) -> RouteDecision:
    reg = registry or DEFAULT_REGISTRY
    persona = reg.get(requested_persona_id)
    if persona.id == SAFETY_PERSONA_ID or SAFETY_PERSONA_ID not in reg:
        return RouteDecision(persona.id)

    text = (user_text or "").strip()
    if not text:
        return RouteDecision(persona.id)
    for rule in ESCALATION_RULES:
        if rule.pattern.search(text):
            return RouteDecision(SAFETY_PERSONA_ID, rule.reason)
    return RouteDecision(persona.id)
