# concierge/services/prompts.py
from __future__ import annotations

from typing import Optional

from concierge.config import DEFAULT_BOOKING_URL, DEFAULT_SITE_NAME
from concierge.services.personas import DEFAULT_REGISTRY, PersonaRegistry

MODULE_NOTES = {
    "education": "Module: Education (general what-to-expect and high-level explanations).",
    "preconsult": "Module: Pre-Consult (guided questions; educational only; suggest booking).",
    "postcare": "Module: Post-Treatment Care (educational guidance; identify red flags; encourage contacting provider).",
}

GLOBAL_SAFETY_RULES = (
    "Education only. No diagnosis. No prescriptions. No treatment plans.",
    "No individualized medical advice, clearance, dosing/units, protocols, or prescribing.",
    "If a question needs personalized advice, recommend an in-person consultation.",
    "If a question is outside your topics, say so briefly and point to the right expert or a consultation.",
    "Calm, non-alarmist tone.",
    "If urgent symptoms or emergencies are described, instruct the user to call 911 or seek emergency care immediately.",
)


def base_system_prompt(
    persona_id: str,
    module: Optional[str] = "education",
    *,
    registry: Optional[PersonaRegistry] = None,
    site_name: str = DEFAULT_SITE_NAME,
    booking_url: str = DEFAULT_BOOKING_URL,
) -> str:
    """System prompt for one persona: identity, scope, the fixed safety rules, and the close.

    Deterministic for a given persona id and module.
    """
    p = (registry or DEFAULT_REGISTRY).get(persona_id)
    module_note = MODULE_NOTES.get(module or "education", MODULE_NOTES["education"])

    return "\n".join(
        [
            f"You are {p.display_name} ({p.role}) for {site_name}.",
            module_note,
            f"Tone: {p.tone}",
            f"Specialty: {p.specialty}",
            "",
            "Allowed topics (stay inside these unless escalating to consult):",
            *(f"- {t}" for t in p.allowed_topics),
            "",
            "Restricted topics (do NOT answer with medical advice; do NOT improvise):",
            *(f"- {t}" for t in p.restricted_topics),
            "",
            "Global safety rules (ALWAYS ON):",
            *(f"- {r}" for r in GLOBAL_SAFETY_RULES),
            "",
            "Response style rules:",
            *(f"- {r}" for r in p.response_style_rules),
            "",
            "Escalation rules (follow them; do not cross persona scope):",
            *(f"- {r}" for r in p.escalation_rules),
            "",
            "Booking (soft, optional, never pushy):",
            f"- If the user indicates readiness to book (e.g. {', '.join(p.booking_triggers)}), offer this link: {booking_url}",
            "",
            f'End every reply with: "{p.safe_close}"',
            f'Then include this disclaimer verbatim: "{p.disclaimer}"',
        ]
    )
