# concierge/api/deps.py
from __future__ import annotations

from typing import AsyncGenerator, Optional

from fastapi import Depends, Request

from concierge.config import Settings, get_settings
from concierge.services.openai_client import OpenAIClient
from concierge.services.personas import DEFAULT_REGISTRY, PersonaRegistry


def get_registry(request: Request) -> PersonaRegistry:
    """Registry loaded at startup (``app.state.registry``)."""
    return getattr(request.app.state, "registry", None) or DEFAULT_REGISTRY


async def get_llm_client(
    settings: Settings = Depends(get_settings),
) -> AsyncGenerator[Optional[OpenAIClient], None]:
    """
    Short-lived LLM client per request, or ``None`` when no credential is
    configured (the flow then answers locally).
    """
    if not settings.llm_configured:
        yield None
        return

    client = OpenAIClient(
        base_url=settings.openai_base_url,
        api_key=settings.openai_api_key,
        model=settings.openai_model,
        timeout=settings.openai_timeout,
    )
    try:
        yield client
    finally:
        await client.aclose()
