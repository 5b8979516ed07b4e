"""
Pydantic schemas for journal entries.
"""
import datetime as dt
from typing import Optional
from pydantic import BaseModel, Field

class JournalEntryIn(BaseModel):
    title: Optional[str] = Field(default=None, max_length=150)
    content: str | None = None
    entryDate: Optional[dt.datetime] = None
    associatedMood: Optional[str] = None

class JournalEntryUpdateIn(BaseModel):
    """Partial update; an empty title resets to the default title."""
    title: Optional[str] = Field(default=None, max_length=150)
    content: Optional[str] = None
    associatedMood: Optional[str] = None
