"""
Generation Service Abstract Interface

Unified interface for text-completion providers used by the chat companion.
Providers are stateless: every call receives the full history it should see.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List


@dataclass(frozen=True)
class HistoryTurn:
    """
    One entry of the history sent to a provider.

    ``role`` uses the provider vocabulary: "user" or "model".
    """
    role: str
    text: str


class GenerationError(Exception):
    """Raised by a provider when no reply could be produced."""


class GenerationService(ABC):
    """Generation Service Abstract Base Class"""

    @abstractmethod
    async def generate_reply(self, history: List[HistoryTurn], new_message: str) -> str:
        """
        Produce the assistant reply to ``new_message``.

        Parameters:
        - history: Prior turns, starting with a user turn and alternating roles
        - new_message: The user message being answered

        Returns:
        - Reply text

        Raises:
        - GenerationError: provider unavailable, HTTP failure, blocked or empty reply
        """

    @abstractmethod
    def is_available(self) -> bool:
        """Check if service is configured"""

    @property
    @abstractmethod
    def name(self) -> str:
        """Service name (e.g., "Gemini API")"""
