from pydantic import BaseModel
from typing import List


class PersonaView(BaseModel):
    id: str
    displayName: str
    role: str
    specialty: str
    tone: str
    allowedTopics: List[str]
    safeClose: str
    disclaimer: str


class PersonaList(BaseModel):
    personas: List[PersonaView]
    defaultId: str
