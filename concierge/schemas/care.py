from pydantic import BaseModel, Field
from typing import List, Literal

Severity = Literal["normal", "caution", "red-flag"]


class CareCheckIn(BaseModel):
    treatment: str = Field(min_length=1)
    symptom: str = Field(min_length=1)
    timeline: str = Field(min_length=1)


class CareCheckOut(BaseModel):
    severity: Severity
    title: str
    guidance: str
    nextSteps: List[str] = Field(default_factory=list)
    # ready-to-render text, including the compliance footer
    reply: str
    used: Literal["checker", "safety_override"]
    personaIdUsed: str
