"""
Services Module

- Generation: provider interface and the Gemini implementation
- Stores: accounts (credits, ban state) and chat transcripts
- SessionCreditGate: credit-gated chat turns built on the above
"""

from .generation_base import (
    GenerationError,
    GenerationService,
    HistoryTurn,
)
from .gemini_client import gemini_chat_service
from .account_store import AccountStore
from .transcript_store import NewTurn, TranscriptStore
from .session_gate import SessionCreditGate

__all__ = [
    # Generation
    "GenerationError",
    "GenerationService",
    "HistoryTurn",
    "gemini_chat_service",
    # Stores
    "AccountStore",
    "NewTurn",
    "TranscriptStore",
    # Gate
    "SessionCreditGate",
]
