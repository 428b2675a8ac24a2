from fastapi import APIRouter, Depends, Query
from typing import Optional

from concierge.api.deps import get_registry
from concierge.schemas.persona import PersonaList, PersonaView
from concierge.services.personas import Persona, PersonaRegistry, recommended_persona_ids

router = APIRouter(prefix="/api/personas", tags=["personas"])


def _view(p: Persona) -> PersonaView:
    return PersonaView(
        id=p.id,
        displayName=p.display_name,
        role=p.role,
        specialty=p.specialty,
        tone=p.tone,
        allowedTopics=list(p.allowed_topics),
        safeClose=p.safe_close,
        disclaimer=p.disclaimer,
    )


@router.get("", response_model=PersonaList)
async def list_personas(
    slug: Optional[str] = Query(None),
    category: str = Query(""),
    registry: PersonaRegistry = Depends(get_registry),
):
    """Persona catalog for the chat widget; with ``slug``, the ones featured on that service page."""
    if slug:
        personas = [registry.get(pid) for pid in recommended_persona_ids(slug, category) if pid in registry]
    else:
        personas = registry.list()
    return PersonaList(personas=[_view(p) for p in personas], defaultId=registry.default.id)


@router.get("/{persona_id}", response_model=PersonaView)
async def get_persona(persona_id: str, registry: PersonaRegistry = Depends(get_registry)):
    # unknown ids answer with the default persona, same as the chat endpoint
    return _view(registry.get(persona_id))
