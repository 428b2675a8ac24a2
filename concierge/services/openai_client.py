# concierge/services/openai_client.py
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any, Dict, List, Literal, Optional, Union

import httpx

from concierge.config import DEFAULT_BASE_URL, DEFAULT_MODEL

DegradeReason = Literal["timeout", "http_error", "network_error", "parse_error", "empty_content", "unexpected"]


@dataclass(frozen=True)
class Ok:
    reply: str


@dataclass(frozen=True)
class Degraded:
    reason: DegradeReason
    status_code: Optional[int] = None
    detail: str = ""


CompletionOutcome = Union[Ok, Degraded]


class CompletionError(RuntimeError):
    def __init__(self, reason: DegradeReason, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.reason = reason
        self.status_code = status_code


class OpenAIClient:
    """Thin client for an OpenAI-compatible Chat Completions API.

    One request per call, no retries. Every failure is raised as
    ``CompletionError`` carrying a degrade reason.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        timeout: float = 60.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.base_url = (base_url or os.getenv("OPENAI_BASE_URL") or DEFAULT_BASE_URL).rstrip("/")
        self.api_key = api_key or os.getenv("OPENAI_API_KEY")
        self.model = model or os.getenv("OPENAI_MODEL") or DEFAULT_MODEL
        self.timeout = timeout

        if not self.api_key:
            raise CompletionError("unexpected", "OPENAI_API_KEY is not configured")

        self._client = httpx.AsyncClient(base_url=self.base_url, timeout=self.timeout, transport=transport)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "OpenAIClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def chat(
        self,
        messages: List[Dict[str, Any]],
        temperature: float = 0.4,
        extra: Optional[Dict[str, Any]] = None,
    ) -> str:
        """
        Perform a non-streaming chat completion and return the assistant text
        exactly as received (may be empty).
        """
        payload: Dict[str, Any] = {
            "model": self.model,
            "messages": messages,
            "temperature": temperature,
        }
        if extra:
            payload.update(extra)

        headers = {"Authorization": f"Bearer {self.api_key}"}

        try:
            res = await self._client.post("/chat/completions", headers=headers, json=payload)
        except httpx.TimeoutException as e:
            raise CompletionError("timeout", f"Completion timed out: {e}") from e
        except httpx.HTTPError as e:
            raise CompletionError("network_error", f"Completion request failed: {e}") from e

        if not res.is_success:
            raise CompletionError(
                "http_error",
                f"Upstream HTTP {res.status_code}: {res.text[:200]}",
                status_code=res.status_code,
            )

        try:
            data = res.json()
        except ValueError as e:
            raise CompletionError("parse_error", f"Invalid JSON body: {e}", status_code=res.status_code) from e

        choices = data.get("choices") if isinstance(data, dict) else None
        if not choices or not isinstance(choices, list):
            raise CompletionError("parse_error", f"Empty choices: {str(data)[:200]}", status_code=res.status_code)
        message = choices[0].get("message") if isinstance(choices[0], dict) else None
        if not isinstance(message, dict):
            raise CompletionError("parse_error", f"Invalid message: {message!r}", status_code=res.status_code)
        content = message.get("content")
        if content is None:
            return ""
        if not isinstance(content, str):
            raise CompletionError("parse_error", f"Invalid content: {message!r}", status_code=res.status_code)
        return content
