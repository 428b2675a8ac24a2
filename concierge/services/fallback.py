# concierge/services/fallback.py
from __future__ import annotations

from typing import Dict, Optional, Tuple

from concierge.services.personas import DEFAULT_REGISTRY, PersonaRegistry

FALLBACK_POINTS: Dict[str, Tuple[str, ...]] = {
    "beau-tox": (
        "General timeline: effects often begin in a few days and settle in about 10–14 days.",
        "Typical longevity: about 3–4 months (varies).",
        "Safety: eligibility and personalized plans require an in-person consult.",
    ),
    "filla-grace": (
        "Fillers can restore volume and refine contour; the goal is facial harmony.",
        "Swelling and bruising can happen; most people resume normal activities quickly.",
        "Longevity varies by area and product, often 6–18 months.",
    ),
    "harmony": (
        "Fatigue, sleep changes, and mood shifts are common reasons people ask about hormones.",
        "Any hormone plan starts with lab work and a provider review.",
        "Results build gradually; a consultation sets realistic expectations.",
    ),
    "peppi": (
        "Professional-grade supplements are third-party tested and ordered through our dispensary.",
        "Peptides, GLP-1 medications, and IV therapy all start with a medical evaluation.",
        "Results work best alongside sleep, nutrition, and movement.",
    ),
    "ryan": (
        "We can discuss general safety principles and what-to-expect guidance.",
        "Eligibility is individualized; final recommendations require clinician evaluation.",
        "If something feels urgent or severe, seek urgent/emergency care.",
    ),
    "founder": (
        "Our focus is trust, natural-looking results, and a premium experience.",
        "We start with a consult-first approach and clear expectations.",
        "We'll guide you to the right service and next step.",
    ),
}

GENERIC_POINTS: Tuple[str, ...] = (
    "I can help explain what to expect and point you to the right next step.",
    "Start with a consultation for personalized recommendations.",
    "Happy to suggest questions to ask your provider.",
)


def local_fallback(persona_id: str, user_text: str, *, registry: Optional[PersonaRegistry] = None) -> str:
    p = (registry or DEFAULT_REGISTRY).get(persona_id)
    points = FALLBACK_POINTS.get(p.id, GENERIC_POINTS)
    lines = ["Here's a helpful starting point:", *(f"- {b}" for b in points)]
    question = (user_text or "").strip()
    if question:
        lines += ["", f'You asked: "{question}"']
    lines += ["", p.safe_close, p.disclaimer]
    return "\n".join(lines)
