import logging

from fastapi import APIRouter, HTTPException

from concierge.schemas.care import CareCheckIn, CareCheckOut
from concierge.services import care_check, guardrails
from concierge.services.personas import DEFAULT_PERSONA_ID, SAFETY_PERSONA_ID
from concierge.telemetry import log_event

router = APIRouter(prefix="/api/care", tags=["care"])

logger = logging.getLogger("concierge.api.care")


@router.get("/options")
async def care_options():
    return care_check.options()


@router.post("/normal-check", response_model=CareCheckOut)
async def normal_check(payload: CareCheckIn):
    """'Is this normal?' checker. Guardrails and red-flag rules both end in Dr. Ryan's override."""
    try:
        res = care_check.normal_check(payload.treatment, payload.symptom, payload.timeline)
    except care_check.UnknownCareOption as e:
        raise HTTPException(status_code=400, detail=str(e))

    summary = f"{payload.treatment} {payload.symptom} {payload.timeline}"
    guard_hit = guardrails.looks_like_emergency(summary) or guardrails.post_treatment_red_flags(summary)

    if guard_hit or res.severity == "red-flag":
        log_event(
            logger,
            "care_check_red_flag",
            level=logging.WARNING,
            treatment=payload.treatment,
            symptom=payload.symptom,
            timeline=payload.timeline,
            guardrail=guard_hit,
        )
        return CareCheckOut(
            severity="red-flag",
            title=res.title if res.severity == "red-flag" else "This needs prompt attention",
            guidance=res.guidance,
            nextSteps=list(res.next_steps),
            reply="\n".join([guardrails.ryan_safety_override_reply(summary), "", "Please contact us directly."]),
            used="safety_override",
            personaIdUsed=SAFETY_PERSONA_ID,
        )

    reply = "\n".join(
        [
            res.title,
            "",
            res.guidance,
            "",
            "Next steps:",
            *(f"- {x}" for x in res.next_steps),
            "",
            guardrails.compliance_footer(),
        ]
    )
    return CareCheckOut(
        severity=res.severity,
        title=res.title,
        guidance=res.guidance,
        nextSteps=list(res.next_steps),
        reply=reply,
        used="checker",
        personaIdUsed=DEFAULT_PERSONA_ID,
    )
