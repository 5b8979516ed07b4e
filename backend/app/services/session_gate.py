"""
Credit-gated chat companion sessions.

Every turn that reaches the generation service costs one credit. The credit is
taken (and persisted) before the provider is called and is not given back if
the provider fails or the client goes away: a failed or abandoned turn is
still a spent turn.

Flow of a turn:
    account checks -> conditional credit decrement -> history window
    -> generation service -> transcript append
"""
import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional

from tortoise import timezone

from app.config import settings
from app.core.errors import (
    CreditConflictError,
    ForbiddenError,
    GenerationFailedError,
    InsufficientCreditsError,
    InvalidInputError,
)
from app.models.chat import ChatSession, ChatTurn
from app.models.user import User
from app.services.account_store import AccountStore
from app.services.generation_base import GenerationError, GenerationService, HistoryTurn
from app.services.history import build_history_window, derive_title, preview_text
from app.services.transcript_store import NewTurn, TranscriptStore

logger = logging.getLogger("uvicorn.error")

CREDITS_PER_TURN = 1
DEFAULT_GREETING = "Hello"
TITLE_MAX_CHARS = 100


@dataclass
class Reply:
    reply: str
    credits: int  # Balance after this turn was charged


@dataclass
class SessionStart:
    session_id: str
    title: str
    turns: List[ChatTurn]
    reply: str
    credits: int


@dataclass
class SessionSummary:
    session: ChatSession
    preview: str


@dataclass
class Transcript:
    session: ChatSession
    turns: List[ChatTurn]


class SessionCreditGate:
    """
    Single entry point for chat turns, whether they open a session, continue
    one, or are answered without being stored.

    Args:
        accounts: Account store (balance, ban state)
        transcripts: Session/turn store
        generator: Stateless reply provider
        history_window: Max prior turns sent to the provider
        retry_limit: Attempts at the conditional credit decrement before
            CreditConflictError reaches the caller
    """

    def __init__(
        self,
        accounts: AccountStore,
        transcripts: TranscriptStore,
        generator: GenerationService,
        history_window: int = settings.history_window,
        retry_limit: int = settings.credit_retry_limit,
    ):
        self.accounts = accounts
        self.transcripts = transcripts
        self.generator = generator
        self.history_window = history_window
        self.retry_limit = max(1, retry_limit)

    # ------------------------------------------------------------------
    # Credits
    # ------------------------------------------------------------------
    @staticmethod
    def _check_eligible(account: User) -> None:
        if account.is_banned:
            logger.warning("[chat] banned account %s tried to chat", account.id)
            raise ForbiddenError("Your account has been restricted from using this feature.")
        if account.credits < CREDITS_PER_TURN:
            logger.warning("[chat] account %s has insufficient credits (%s)", account.id, account.credits)
            raise InsufficientCreditsError("Insufficient credits to chat.", credits=account.credits)

    async def _load_eligible(self, account_id) -> User:
        account = await self.accounts.get(account_id)
        self._check_eligible(account)
        return account

    async def _charge(self, account: User) -> int:
        """
        Take one credit from ``account`` and return the new balance.

        The decrement is conditional on the account still being unbanned and
        able to pay, not on the exact balance read, so concurrent turns never
        lose to each other while credits remain. A refused decrement re-reads
        the account and re-runs the ban/balance checks, so a concurrent spend
        of the last credit surfaces as InsufficientCredits.
        """
        for attempt in range(1, self.retry_limit + 1):
            try:
                balance = await self.accounts.conditional_decrement_credits(
                    account.id, CREDITS_PER_TURN, CREDITS_PER_TURN
                )
            except CreditConflictError:
                logger.info("[chat] credit update refused for %s (attempt %d)", account.id, attempt)
                account = await self._load_eligible(account.id)
                continue
            logger.info("[chat] charged %d credit to %s, balance=%d", CREDITS_PER_TURN, account.id, balance)
            return balance
        logger.warning("[chat] giving up on credit update for %s after %d attempts", account.id, self.retry_limit)
        raise CreditConflictError()

    # ------------------------------------------------------------------
    # Generation
    # ------------------------------------------------------------------
    async def _generate(self, history: List[HistoryTurn], message: str, account_id) -> str:
        try:
            return await self.generator.generate_reply(history, message)
        except GenerationError as e:
            logger.warning("[chat] generation failed for %s via %s: %s", account_id, self.generator.name, e)
            raise GenerationFailedError(f"Could not get a reply: {e}") from e

    @staticmethod
    def _require_text(text: Optional[str], what: str = "Message") -> str:
        cleaned = (text or "").strip()
        if not cleaned:
            raise InvalidInputError(f"{what} content is required")
        return cleaned

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------
    async def start_session(self, account_id, first_message: Optional[str] = None) -> SessionStart:
        """
        Charge one credit, get the opening reply and store a new session.

        Without ``first_message`` the provider is greeted with "Hello" and the
        session holds only the assistant reply, titled by date.
        """
        account = await self._load_eligible(account_id)
        balance = await self._charge(account)

        opening = (first_message or "").strip()
        reply = await self._generate([], opening or DEFAULT_GREETING, account.id)

        initial: List[NewTurn] = []
        if opening:
            initial.append(NewTurn("user", opening))
        initial.append(NewTurn("assistant", reply))
        title = derive_title(opening or None, timezone.now())

        session = await self.transcripts.create(account.id, initial, title)
        turns = await self.transcripts.turns(session.id)
        return SessionStart(
            session_id=str(session.id),
            title=session.title,
            turns=turns,
            reply=reply,
            credits=balance,
        )

    async def post_message(self, account_id, session_id, text: str) -> Reply:
        message = self._require_text(text)
        account = await self._load_eligible(account_id)
        session = await self.transcripts.get(account.id, session_id)
        balance = await self._charge(account)

        existing = await self.transcripts.turns(session.id)
        history = build_history_window(existing, self.history_window)
        reply = await self._generate(history, message, account.id)

        await self.transcripts.append_turns(
            session.id, [NewTurn("user", message), NewTurn("assistant", reply)]
        )
        return Reply(reply=reply, credits=balance)

    async def quick_reply(self, account_id, text: str, history: Iterable = ()) -> Reply:
        """
        Answer a message against client-supplied history without storing anything.

        ``history`` items need ``sender`` and ``text``; they go through the same
        window and normalization as stored transcripts.
        """
        message = self._require_text(text)
        account = await self._load_eligible(account_id)
        balance = await self._charge(account)

        window = build_history_window(list(history), self.history_window)
        reply = await self._generate(window, message, account.id)
        return Reply(reply=reply, credits=balance)

    async def rename_session(self, account_id, session_id, new_title: str) -> ChatSession:
        title = (new_title or "").strip() if isinstance(new_title, str) else ""
        if not title or len(title) > TITLE_MAX_CHARS:
            raise InvalidInputError(f"Valid title is required (1-{TITLE_MAX_CHARS} characters)")
        session = await self.transcripts.get(account_id, session_id)
        await self.transcripts.rename(session.id, title)
        session.title = title
        return session

    async def list_sessions(self, account_id) -> List[SessionSummary]:
        summaries = []
        for session in await self.transcripts.list_by_account(account_id):
            last = await self.transcripts.last_turn(session.id)
            summaries.append(SessionSummary(session=session, preview=preview_text(last.text if last else None)))
        return summaries

    async def get_transcript(self, account_id, session_id) -> Transcript:
        session = await self.transcripts.get(account_id, session_id)
        return Transcript(session=session, turns=await self.transcripts.turns(session.id))
