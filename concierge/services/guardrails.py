# concierge/services/guardrails.py
"""Rule-based safety checks that run before any model call.

Both lexicons are ordered tables of ``GuardRule`` so they can be read,
tested and extended without touching the control flow. Matching is plain
case-insensitive phrase matching; when in doubt a rule should over-trigger.
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import List, Literal, Optional, Pattern, Sequence, Tuple

Severity = Literal["emergency", "red-flag"]


@dataclass(frozen=True)
class GuardRule:
    pattern: Pattern[str]
    severity: Severity
    reason: str


@dataclass(frozen=True)
class GuardrailResult:
    triggered: bool
    severity: Optional[Severity] = None
    reasons: Tuple[str, ...] = field(default_factory=tuple)
    reply: Optional[str] = None


def _rules(severity: Severity, terms: Sequence[Tuple[str, str]]) -> Tuple[GuardRule, ...]:
    return tuple(GuardRule(re.compile(p, re.I), severity, r) for p, r in terms)


EMERGENCY_RULES: Tuple[GuardRule, ...] = _rules(
    "emergency",
    [
        (r"can'?t breathe|cannot breathe|unable to breathe|hard to breathe", "difficulty breathing"),
        (r"(difficulty|trouble|struggling) breathing|short(ness)? of breath|gasping", "difficulty breathing"),
        (r"\b(throat|tongue)\b.{0,20}\b(tight|clos|swell|swollen)|\blips?\b.{0,20}\bswell.{0,20}\b(fast|quickly|rapidly)", "airway swelling"),
        (r"anaphyla|severe allergic|allergic reaction|hives all over|epi-?pen", "severe allergic reaction"),
        (r"(difficulty|trouble|can'?t|cannot) swallow", "difficulty swallowing"),
        (r"chest (pain|tightness|pressure)|heart attack", "chest pain"),
        (r"unconscious|passed out|pass(ing)? out|faint(ed|ing)\b|feel(ing)? faint|unresponsive|blacked out", "loss of consciousness"),
        (r"seizure|convulsi", "seizure"),
        (r"stroke|slurred speech|\bface\b.{0,15}\bdroop|facial droop|weakness on one side", "stroke signs"),
        (r"(sudden|lost|losing|loss of) (vision|sight)|can'?t see (anything|out of)|went blind|going blind", "vision loss"),
        (r"(heavy|uncontrolled|won'?t stop|nonstop) bleeding|bleeding (heavily|won'?t stop)", "uncontrolled bleeding"),
        (r"overdos|suicid|kill myself|end my life", "crisis"),
        (r"\b911\b|emergency room|ambulance|medical emergency", "emergency mentioned"),
    ],
)

POST_TREATMENT_RULES: Tuple[GuardRule, ...] = _rules(
    "red-flag",
    [
        (r"vision[\s-]*(change|changes|problem|problems)|blurr(y|ed) vision|double vision|vision[\s-]*blur", "vision changes"),
        (r"blanch|white patch|\b(skin|lips?|area|spot)\b.{0,25}\b(white|gr[ae]y|blue|purple|dusky|pale)\b", "skin blanching or color change"),
        (r"mottl|dusky|lacy (rash|pattern)|livedo", "mottled or dusky skin"),
        (r"(spreading|growing|getting bigger).{0,30}(bruis|discolou?r|redness|patch)|(discolou?r|bruis|redness|patch).{0,30}spreading", "spreading discoloration"),
        (r"(severe|extreme|unbearable|excruciating|intense) pain|pain (is )?(getting worse|worsening|increasing)|worsening pain", "severe or worsening pain"),
        (r"\bpus\b|oozing|abscess|infect", "signs of infection"),
        (r"fever|chills", "fever"),
        (r"blister|scab(bing)? (spreading|everywhere)|skin (is )?(dying|breaking down)|necros", "skin breakdown"),
        (r"(hot|warm) (and|&) (red|swollen)|red streak", "inflammation spreading"),
        (r"droop(y|ing)? (eye|eyelid|lid|brow)|\b(eyes?|eyelids?|lids?|brows?)\b.{0,15}\bdroop", "drooping eyelid or brow"),
        (r"numb(ness)?.{0,30}(spreading|won'?t go away|getting worse)", "persistent numbness"),
    ],
)

_COMPLIANCE_FOOTER = (
    "Educational information only. This is not a diagnosis or medical advice. "
    "For personalized guidance, book a consultation. "
    "If you think you may have an emergency, call 911."
)


def _normalize(text: Optional[str]) -> str:
    # Curly apostrophes from phone keyboards
    return (text or "").replace("’", "'").replace("‘", "'").strip().lower()


def _matches(rules: Sequence[GuardRule], text: Optional[str]) -> List[str]:
    t = _normalize(text)
    if not t:
        return []
    out: List[str] = []
    for r in rules:
        if r.pattern.search(t) and r.reason not in out:
            out.append(r.reason)
    return out


def looks_like_emergency(text: Optional[str]) -> bool:
    return bool(_matches(EMERGENCY_RULES, text))


def post_treatment_red_flags(text: Optional[str]) -> bool:
    return bool(_matches(POST_TREATMENT_RULES, text))


def compliance_footer() -> str:
    return _COMPLIANCE_FOOTER


def ryan_safety_override_reply(text: Optional[str] = None) -> str:
    """Urgent-care reply in Dr. Ryan's voice, whichever persona was selected.

    The user's message is acknowledged but never quoted or interpreted.
    """
    opener = (
        "Dr. Ryan here, our Medical Director. Thank you for telling me what's going on."
        if _normalize(text)
        else "Dr. Ryan here, our Medical Director."
    )
    return "\n".join(
        [
            opener,
            "What you described may need prompt medical attention, so I'm stepping in.",
            "",
            "- If you have trouble breathing, chest pain, swelling of the lips, tongue or throat, fainting, "
            "or sudden vision changes: call 911 or go to the nearest emergency room now.",
            "- If this started after a recent treatment (severe or worsening pain, skin color changes, "
            "vision changes): contact the clinic right away. Do not wait for your next appointment.",
            "- I can't assess or diagnose this over chat. An in-person evaluation is the safe next step.",
            "",
            compliance_footer(),
        ]
    )


def evaluate(text: Optional[str], module: Optional[str] = "education") -> GuardrailResult:
    """Run the emergency lexicon always, and the post-treatment lexicon for ``postcare``."""
    reasons = _matches(EMERGENCY_RULES, text)
    severity: Optional[Severity] = "emergency" if reasons else None
    if module == "postcare":
        flags = _matches(POST_TREATMENT_RULES, text)
        if flags and severity is None:
            severity = "red-flag"
        reasons.extend(f for f in flags if f not in reasons)

    if not reasons:
        return GuardrailResult(triggered=False)
    return GuardrailResult(
        triggered=True,
        severity=severity,
        reasons=tuple(reasons),
        reply=ryan_safety_override_reply(text),
    )
