"""
Database model for accounts.
An account logs in, owns chat sessions, mood entries and journal entries,
and holds the credit balance that pays for chat turns.
"""
import uuid
from tortoise import fields, models
from tortoise.validators import MinValueValidator

from app.config import settings

class User(models.Model):
    """
    Account database model.

    Relationships:
    - Has many ChatSessions (related_name="chat_sessions")
    - Has many MoodEntries (related_name="mood_entries")
    - Has many JournalEntries (related_name="journal_entries")

    Invariants:
    - credits never drops below zero; chat services only decrement it through
      a conditional UPDATE, admins can only set it to a non-negative value
    - a banned account keeps logging in but is never charged nor answered
    - accounts are not deleted
    """
    id = fields.UUIDField(pk=True, default=uuid.uuid4)
    username = fields.CharField(max_length=256, unique=True, index=True)  # Stored lowercased
    email = fields.CharField(max_length=256, null=True)
    password_hash = fields.CharField(max_length=255)  # argon2, never plain text
    credits = fields.IntField(default=settings.starting_credits, validators=[MinValueValidator(0)])
    role = fields.CharField(max_length=16, default="user")  # "user" or "admin"
    is_banned = fields.BooleanField(default=False)
    created_at = fields.DatetimeField(auto_now_add=True)
    updated_at = fields.DatetimeField(auto_now=True)

    class Meta:
        table = "users"
