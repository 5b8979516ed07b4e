"""
Pydantic schemas for the mood log.
"""
import datetime as dt
from typing import Optional
from pydantic import BaseModel, Field

class MoodEntryIn(BaseModel):
    mood: str  # Case-insensitive; must be one of app.models.MOODS
    score: int = Field(ge=0, le=10)
    notes: Optional[str] = Field(default=None, max_length=500)
    entryDate: Optional[dt.datetime] = None  # Defaults to now
