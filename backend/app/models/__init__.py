# app/models/__init__.py
"""
Database models module initialization.
Exports all Tortoise ORM models so callers can import them from one place.

Models exported:
- User: Account with credits, role and ban flag
- ChatSession: Chat companion conversation thread
- ChatTurn: One message in a ChatSession transcript
- MoodEntry: Mood log entry
- JournalEntry: Journal entry
"""
from .user import User
from .chat import ChatSession, ChatTurn
from .mood_entry import MoodEntry, MOODS
from .journal_entry import JournalEntry, DEFAULT_JOURNAL_TITLE
