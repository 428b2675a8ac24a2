from pydantic import BaseModel, Field
from typing import List, Literal, Optional

Role = Literal["user", "assistant", "system"]
ModuleId = Literal["education", "preconsult", "postcare"]
Used = Literal["safety_override", "fallback", "openai"]


class ChatMessage(BaseModel):
    role: Role
    content: str


class ChatIn(BaseModel):
    personaId: str = Field(min_length=1)
    module: Optional[ModuleId] = None
    messages: List[ChatMessage]


class ChatOut(BaseModel):
    reply: str
    used: Used
    personaIdRequested: str
    personaIdUsed: str
    # scope escalation reason when another persona answered
    escalated: Optional[str] = None


class ErrorOut(BaseModel):
    error: str
