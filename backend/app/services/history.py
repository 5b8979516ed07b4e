"""
Transcript helpers for the chat companion: turning stored turns into the
history a provider accepts, and deriving titles and previews.
"""
import datetime as dt
from typing import Iterable, List, Optional

from .generation_base import HistoryTurn

TITLE_PREVIEW_CHARS = 50
ELLIPSIS = "..."


def to_protocol_history(turns: Iterable) -> List[HistoryTurn]:
    """
    Map transcript turns to provider roles.

    ``turns`` is anything with ``sender`` and ``text`` attributes. "user"
    stays "user"; every other sender ("assistant", or "bot" from older
    clients) becomes "model".
    """
    return [
        HistoryTurn(role="user" if t.sender == "user" else "model", text=t.text)
        for t in turns
    ]


def normalize_history(window: List[HistoryTurn]) -> List[HistoryTurn]:
    """
    Longest strictly alternating prefix that starts on a user turn.

    Leading model entries are dropped; the walk then stops at the first entry
    whose role repeats the previous one, so a reply is never paired with the
    wrong user turn.

    >>> roles = lambda h: [t.role for t in h]
    >>> roles(normalize_history([HistoryTurn("model", "a"), HistoryTurn("user", "b"),
    ...                          HistoryTurn("user", "c"), HistoryTurn("model", "d")]))
    ['user']
    """
    normalized: List[HistoryTurn] = []
    for entry in window:
        if not normalized:
            if entry.role == "user":
                normalized.append(entry)
        elif entry.role != normalized[-1].role:
            normalized.append(entry)
        else:
            break
    return normalized


def build_history_window(turns: Iterable, limit: int) -> List[HistoryTurn]:
    """Map, keep the last ``limit`` entries, then normalize."""
    if limit <= 0:
        return []
    return normalize_history(to_protocol_history(turns)[-limit:])


def truncate(text: str, limit: int = TITLE_PREVIEW_CHARS) -> str:
    return text[:limit] + (ELLIPSIS if len(text) > limit else "")


def derive_title(first_user_text: Optional[str], now: dt.datetime) -> str:
    """
    Session title: the first user message cut to 50 characters (plus "..."
    when cut), or a dated fallback for sessions opened without a message.
    """
    if first_user_text:
        return truncate(first_user_text)
    return f"Chat from {now:%Y-%m-%d}"


def preview_text(last_text: Optional[str]) -> str:
    if not last_text:
        return "No messages yet."
    return truncate(last_text)
