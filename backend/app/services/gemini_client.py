"""
Gemini Chat Service

Calls the Gemini generateContent REST endpoint to answer chat companion turns.
The persona lives in the system instruction; history and the new message are
sent as alternating user/model contents on every call.
"""
import logging
from typing import List

import httpx

from .generation_base import GenerationError, GenerationService, HistoryTurn
from ..config import settings

logger = logging.getLogger("uvicorn.error")

SYSTEM_INSTRUCTION = """You are MindMate, a warm and supportive wellness companion.
Listen carefully, acknowledge the user's feelings and gently point towards healthy ways of coping or reflecting.
You are not a therapist: never diagnose and never give medical advice.
If the user mentions self-harm, being in danger or an acute crisis, calmly encourage them to contact a crisis line, emergency services or a professional they trust, and do not go further into that topic.
When the user names a feeling such as stress, anxiety or sadness, you may offer a short breathing exercise, a journal prompt or logging their mood.
Keep replies brief and kind."""

SAFETY_CATEGORIES = (
    "HARM_CATEGORY_HARASSMENT",
    "HARM_CATEGORY_HATE_SPEECH",
    "HARM_CATEGORY_SEXUALLY_EXPLICIT",
    "HARM_CATEGORY_DANGEROUS_CONTENT",
)


class GeminiChatService(GenerationService):
    """Gemini generateContent Service"""

    def __init__(self):
        self.api_key = settings.gemini_api_key
        self.api_base = settings.gemini_api_base.rstrip("/")
        self.model = settings.gemini_model
        self.temperature = settings.chat_temperature
        self.timeout = settings.gemini_timeout_sec

    @property
    def name(self) -> str:
        return "Gemini API"

    def is_available(self) -> bool:
        """Check if API key is configured"""
        return bool(self.api_key)

    def _build_payload(self, history: List[HistoryTurn], new_message: str) -> dict:
        contents = [{"role": t.role, "parts": [{"text": t.text}]} for t in history]
        contents.append({"role": "user", "parts": [{"text": new_message}]})
        return {
            "systemInstruction": {"parts": [{"text": SYSTEM_INSTRUCTION}]},
            "contents": contents,
            "generationConfig": {"temperature": self.temperature},
            "safetySettings": [
                {"category": c, "threshold": "BLOCK_MEDIUM_AND_ABOVE"} for c in SAFETY_CATEGORIES
            ],
        }

    @staticmethod
    def _extract_text(result: dict) -> str:
        candidates = result.get("candidates") or []
        if not candidates:
            reason = (result.get("promptFeedback") or {}).get("blockReason", "no candidates")
            raise GenerationError(f"Gemini returned no reply ({reason})")
        parts = (candidates[0].get("content") or {}).get("parts") or []
        text = "".join(p.get("text", "") for p in parts).strip()
        if not text:
            reason = candidates[0].get("finishReason", "empty content")
            raise GenerationError(f"Gemini returned an empty reply ({reason})")
        return text

    async def generate_reply(self, history: List[HistoryTurn], new_message: str) -> str:
        if not self.is_available():
            raise GenerationError(f"{self.name}: API key not configured")

        url = f"{self.api_base}/models/{self.model}:generateContent"
        headers = {
            "x-goog-api-key": self.api_key,
            "Content-Type": "application/json",
        }
        payload = self._build_payload(history, new_message)

        logger.debug("[Gemini] Calling %s with %d history turns", self.model, len(history))
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                resp = await client.post(url, headers=headers, json=payload)
                resp.raise_for_status()
                result = resp.json()
        except httpx.HTTPStatusError as e:
            raise GenerationError(f"Gemini API error: HTTP {e.response.status_code}") from e
        except httpx.HTTPError as e:
            raise GenerationError(f"Gemini API unreachable: {e}") from e
        except ValueError as e:
            raise GenerationError("Gemini API returned invalid JSON") from e

        return self._extract_text(result)


# Global singleton
gemini_chat_service = GeminiChatService()
