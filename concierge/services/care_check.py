# concierge/services/care_check.py
"""'Is this normal?' checker for common after-treatment symptoms.

A small ordered rule table keyed by treatment x symptom x timeline. The first
matching rule wins; ``"*"`` matches anything. Combinations with no rule are
reported as ``caution`` so that the client is steered towards the clinic.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Literal, Tuple, Union

CareSeverity = Literal["normal", "caution", "red-flag"]

TREATMENT_OPTIONS: Dict[str, str] = {
    "botox-dysport": "Botox / Dysport / Jeuveau",
    "dermal-filler": "Dermal filler",
    "microneedling": "Microneedling",
    "chemical-peel": "Chemical peel",
    "laser": "Laser treatment",
    "iv-therapy": "IV therapy / injections",
}

SYMPTOM_OPTIONS: Dict[str, str] = {
    "swelling": "Swelling",
    "bruising": "Bruising",
    "redness": "Redness",
    "tenderness": "Tenderness",
    "itching": "Itching",
    "headache": "Headache",
    "lumps": "Small lumps or bumps",
    "asymmetry": "Uneven results",
    "blanching": "White, gray, or dusky skin",
    "vision-changes": "Vision changes",
    "severe-pain": "Severe or worsening pain",
    "fever": "Fever or chills",
}

TIMELINE_OPTIONS: Dict[str, str] = {
    "same-day": "Same day",
    "day-1": "Next day",
    "days-2-3": "2–3 days",
    "week-1": "About a week",
    "week-2-plus": "Two weeks or more",
}

EARLY = ("same-day", "day-1", "days-2-3")
FIRST_WEEK = EARLY + ("week-1",)
ANY = "*"

Match = Union[str, Tuple[str, ...]]


@dataclass(frozen=True)
class CareRule:
    treatment: Match
    symptom: Match
    timeline: Match
    severity: CareSeverity
    title: str
    guidance: str
    next_steps: Tuple[str, ...] = ()

    def matches(self, treatment: str, symptom: str, timeline: str) -> bool:
        return all(
            want == ANY or value == want or (isinstance(want, tuple) and value in want)
            for want, value in ((self.treatment, treatment), (self.symptom, symptom), (self.timeline, timeline))
        )


@dataclass(frozen=True)
class CareCheckResult:
    severity: CareSeverity
    title: str
    guidance: str
    next_steps: Tuple[str, ...]


_CONTACT = "Contact the clinic so a provider can take a look."
_URGENT = (
    "Contact the clinic right away.",
    "If symptoms are severe or getting worse quickly, call 911 or go to the emergency room.",
)

CARE_RULES: Tuple[CareRule, ...] = (
    CareRule(ANY, ("vision-changes", "blanching", "severe-pain", "fever"), ANY, "red-flag",
             "This needs prompt attention",
             "This symptom is not an expected part of recovery.", _URGENT),
    CareRule("dermal-filler", "lumps", EARLY, "normal",
             "Usually expected",
             "Small bumps are common while swelling settles and the product integrates.",
             ("Avoid massaging unless your provider told you to.", "Check again in a few days.")),
    CareRule("dermal-filler", "lumps", ANY, "caution",
             "Worth a check-in",
             "Bumps that last beyond the first week are usually easy to adjust but should be seen.",
             (_CONTACT,)),
    CareRule(ANY, "swelling", EARLY, "normal",
             "Usually expected",
             "Swelling is common in the first few days and usually peaks around day two.",
             ("Use a cool compress for short periods.", "Sleep with your head slightly elevated.")),
    CareRule(ANY, "bruising", FIRST_WEEK, "normal",
             "Usually expected",
             "Bruising can appear after injections and typically fades over 7–10 days.",
             ("Arnica and cool compresses may help.", "Avoid alcohol and blood-thinning supplements if your provider advised it.")),
    CareRule(ANY, ("redness", "tenderness"), EARLY, "normal",
             "Usually expected",
             "Mild redness and tenderness are common right after treatment and settle within a few days.",
             ("Keep the area clean and skip active skincare until it calms down.",)),
    CareRule(ANY, "itching", ("same-day", "day-1"), "normal",
             "Usually expected",
             "Light itching can happen as skin recovers.",
             ("Avoid scratching or rubbing the area.",)),
    CareRule("botox-dysport", "headache", EARLY, "normal",
             "Usually expected",
             "A mild headache for a day or two after neuromodulator treatment is common.",
             ("Rest and hydrate.", "Reach out if it is severe or does not ease.")),
    CareRule("botox-dysport", "asymmetry", FIRST_WEEK, "normal",
             "Results are still settling",
             "Neuromodulators take up to 14 days to reach full effect; early unevenness often resolves.",
             ("Reassess at two weeks before considering a touch-up.",)),
    CareRule("dermal-filler", "asymmetry", FIRST_WEEK, "normal",
             "Results are still settling",
             "Uneven swelling can make results look asymmetric for the first week.",
             ("Reassess once swelling has resolved.",)),
    CareRule(ANY, "asymmetry", ANY, "caution",
             "Worth a check-in",
             "If results still look uneven after they have settled, a follow-up visit can help.",
             ("Book a follow-up so your provider can assess.",)),
)

_DEFAULT_RESULT = CareCheckResult(
    severity="caution",
    title="Worth a check-in",
    guidance="This can happen, but it is lasting longer than usual or is not a typical pattern.",
    next_steps=(_CONTACT,),
)


class UnknownCareOption(ValueError):
    pass


def normal_check(treatment: str, symptom: str, timeline: str) -> CareCheckResult:
    for name, value, options in (
        ("treatment", treatment, TREATMENT_OPTIONS),
        ("symptom", symptom, SYMPTOM_OPTIONS),
        ("timeline", timeline, TIMELINE_OPTIONS),
    ):
        if value not in options:
            raise UnknownCareOption(f"unknown {name}: {value!r}")

    for rule in CARE_RULES:
        if rule.matches(treatment, symptom, timeline):
            return CareCheckResult(rule.severity, rule.title, rule.guidance, rule.next_steps)
    return _DEFAULT_RESULT


def options() -> Dict[str, List[Dict[str, str]]]:
    return {
        "treatments": [{"id": k, "label": v} for k, v in TREATMENT_OPTIONS.items()],
        "symptoms": [{"id": k, "label": v} for k, v in SYMPTOM_OPTIONS.items()],
        "timelines": [{"id": k, "label": v} for k, v in TIMELINE_OPTIONS.items()],
    }
