"""
Pydantic schemas for the chat companion endpoints.
"""
from pydantic import BaseModel, Field
from typing import List, Optional

class ClientTurn(BaseModel):
    """A turn of client-held history for the stateless chat endpoint."""
    sender: str  # "user"; anything else is treated as the assistant
    text: str

class QuickChatIn(BaseModel):
    message: str | None = None
    history: List[ClientTurn] = Field(default_factory=list)

class StartSessionIn(BaseModel):
    firstMessage: Optional[str] = None  # Omitted: the assistant opens the conversation

class PostMessageIn(BaseModel):
    message: str | None = None

class SessionTitleIn(BaseModel):
    title: str | None = None  # 1-100 characters after trimming
