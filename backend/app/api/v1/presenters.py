"""
Model -> JSON dict conversion shared by the v1 routers.
"""
import datetime as dt
from typing import Optional

from app.models import ChatTurn, JournalEntry, MoodEntry, User


def iso(value: Optional[dt.datetime]) -> Optional[str]:
    """ISO-8601 string; naive values are UTC and get a "Z" suffix."""
    if value is None:
        return None
    return value.isoformat() + ("Z" if value.tzinfo is None else "")


def user_to_dict(u: User) -> dict:
    return {
        "id": str(u.id),
        "username": u.username,
        "email": u.email,
        "role": u.role,
        "credits": u.credits,
        "isBanned": u.is_banned,
        "createdAt": iso(u.created_at),
    }


def turn_to_dict(t: ChatTurn) -> dict:
    return {"sender": t.sender, "text": t.text, "createdAt": iso(t.created_at)}


def mood_to_dict(m: MoodEntry) -> dict:
    return {
        "id": str(m.id),
        "mood": m.mood,
        "score": m.score,
        "notes": m.notes,
        "entryDate": iso(m.entry_date),
        "createdAt": iso(m.created_at),
    }


def journal_to_dict(j: JournalEntry) -> dict:
    return {
        "id": str(j.id),
        "title": j.title,
        "content": j.content,
        "entryDate": iso(j.entry_date),
        "associatedMood": j.associated_mood,
        "createdAt": iso(j.created_at),
        "updatedAt": iso(j.updated_at),
    }
