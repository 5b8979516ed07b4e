"""
Transcript store: chat sessions and their ordered turns.

Ownership is part of every lookup query, so a session that belongs to another
account is indistinguishable from one that does not exist.
"""
from dataclasses import dataclass
from typing import List, Optional, Sequence

from tortoise import timezone
from tortoise.transactions import in_transaction

from app.core.errors import NotFoundError
from app.models.chat import ChatSession, ChatTurn
from app.services.account_store import parse_uuid


@dataclass(frozen=True)
class NewTurn:
    sender: str  # "user" or "assistant"
    text: str


class TranscriptStore:

    async def create(self, account_id, initial_turns: Sequence[NewTurn], title: str) -> ChatSession:
        """Create a session owned by ``account_id`` holding ``initial_turns`` in order."""
        async with in_transaction() as conn:
            session = await ChatSession.create(user_id=account_id, title=title, using_db=conn)
            if initial_turns:
                await ChatTurn.bulk_create(
                    [ChatTurn(session_id=session.id, sender=t.sender, text=t.text) for t in initial_turns],
                    using_db=conn,
                )
        return session

    async def get(self, account_id, session_id) -> ChatSession:
        key = parse_uuid(session_id)
        session = await ChatSession.get_or_none(id=key, user_id=account_id) if key else None
        if not session:
            raise NotFoundError("Chat session not found")
        return session

    async def turns(self, session_id) -> List[ChatTurn]:
        return await ChatTurn.filter(session_id=session_id).order_by("id")

    async def last_turn(self, session_id) -> Optional[ChatTurn]:
        return await ChatTurn.filter(session_id=session_id).order_by("-id").first()

    async def append_turns(self, session_id, turns: Sequence[NewTurn]) -> None:
        """Append ``turns`` as one unit and bump the session's last activity."""
        async with in_transaction() as conn:
            await ChatTurn.bulk_create(
                [ChatTurn(session_id=session_id, sender=t.sender, text=t.text) for t in turns],
                using_db=conn,
            )
            await ChatSession.filter(id=session_id).using_db(conn).update(last_activity=timezone.now())

    async def rename(self, session_id, title: str) -> None:
        await ChatSession.filter(id=session_id).update(title=title, last_activity=timezone.now())

    async def list_by_account(self, account_id) -> List[ChatSession]:
        """Sessions of an account, most recently active first."""
        return await ChatSession.filter(user_id=account_id).order_by("-last_activity", "-created_at")
