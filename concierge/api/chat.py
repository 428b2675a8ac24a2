# concierge/api/chat.py
import logging
import time
from typing import Any, Optional

from fastapi import APIRouter, Depends

from concierge.api.deps import get_llm_client, get_registry
from concierge.config import Settings, get_settings
from concierge.runtime.flow import make_chat_flow, new_shared
from concierge.schemas.chat import ChatIn, ChatOut, ErrorOut
from concierge.services.personas import PersonaRegistry
from concierge.telemetry import log_event

router = APIRouter(prefix="/api/chat", tags=["chat"])

logger = logging.getLogger("concierge.api.chat")


@router.post("", response_model=ChatOut, responses={400: {"model": ErrorOut}})
async def chat_endpoint(
    payload: ChatIn,
    registry: PersonaRegistry = Depends(get_registry),
    settings: Settings = Depends(get_settings),
    llm_client: Optional[Any] = Depends(get_llm_client),
):
    """
    Handle one chat turn from the widget:
    1. Safety gate (emergency / post-treatment red flags) before anything else
    2. Persona routing, then model reply or local fallback
    3. Return reply + which path produced it
    """
    started = time.time()
    shared = new_shared(
        persona_id=payload.personaId,
        module=payload.module,
        messages=[m.model_dump() for m in payload.messages],
        registry=registry,
        settings=settings,
        llm_client=llm_client,
    )

    await make_chat_flow().run_async(shared)

    out = ChatOut(
        reply=shared["assistant_reply"],
        used=shared["used"],
        personaIdRequested=payload.personaId,
        personaIdUsed=shared["persona_id_used"],
        escalated=shared.get("escalated"),
    )
    log_event(
        logger,
        "chat_turn",
        personaIdRequested=out.personaIdRequested,
        personaIdUsed=out.personaIdUsed,
        module=shared.get("module"),
        used=out.used,
        escalated=out.escalated,
        turns=len(shared.get("history") or []),
        latencyMs=int((time.time() - started) * 1000),
    )
    return out
