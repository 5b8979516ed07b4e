"""
Database models for the chat companion.
A ChatSession is one conversation thread; its ChatTurns are the transcript.
"""
import uuid
from tortoise import fields, models

class ChatSession(models.Model):
    """
    One conversation thread owned by exactly one account.

    ``last_activity`` moves forward on every append or rename and drives the
    newest-first session list.
    """
    id = fields.UUIDField(pk=True, default=uuid.uuid4)
    user = fields.ForeignKeyField(
        "models.User",
        related_name="chat_sessions",
        on_delete=fields.CASCADE,
    )
    title = fields.CharField(max_length=128)
    created_at = fields.DatetimeField(auto_now_add=True)
    last_activity = fields.DatetimeField(auto_now_add=True, index=True)

    class Meta:
        table = "chat_sessions"


class ChatTurn(models.Model):
    # Autoincrement pk doubles as transcript position: turns are read back in insertion order
    id = fields.IntField(pk=True)
    session = fields.ForeignKeyField(
        "models.ChatSession",
        related_name="turns",
        on_delete=fields.CASCADE,
    )
    sender = fields.CharField(max_length=16)  # "user" or "assistant"
    text = fields.TextField()
    created_at = fields.DatetimeField(auto_now_add=True)

    class Meta:
        table = "chat_turns"
