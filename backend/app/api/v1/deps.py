from fastapi import Depends, Header, HTTPException, Request, status
from app.config import settings
from app.core.security import decode_access_token
from app.models.user import User
from app.services.account_store import AccountStore, parse_uuid
from app.services.gemini_client import gemini_chat_service
from app.services.generation_base import GenerationService
from app.services.session_gate import SessionCreditGate
from app.services.transcript_store import TranscriptStore

async def get_current_user(
    request: Request,
    authorization: str | None = Header(default=None),
):
    """
    FastAPI dependency resolving the bearer token to an account.

    The token is read from the ``Authorization: Bearer`` header first and the
    HttpOnly ``accessToken`` cookie second. Banned accounts still resolve;
    the chat services decide what they may do.

    Raises:
        HTTPException (401): AUTH_REQUIRED, AUTH_INVALID_TOKEN or AUTH_USER_NOT_FOUND
    """
    token = None
    if authorization and authorization.lower().startswith("bearer "):
        token = authorization.split(" ", 1)[1].strip()
    if not token:
        token = request.cookies.get("accessToken")

    if not token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="AUTH_REQUIRED")

    try:
        payload = decode_access_token(token)
        user_id = parse_uuid(payload.get("sub"))
    except Exception:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="AUTH_INVALID_TOKEN")

    user = await User.get_or_none(id=user_id) if user_id else None
    if not user:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="AUTH_USER_NOT_FOUND")
    return user

async def require_admin(current: User = Depends(get_current_user)) -> User:
    """
    FastAPI dependency for admin-only routes.

    The role is checked on the stored account, not the token claim, so a
    demotion takes effect before the token expires.

    Raises:
        HTTPException (403): FORBIDDEN_ADMIN_ONLY
    """
    if getattr(current, "role", "user") != "admin":
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="FORBIDDEN_ADMIN_ONLY")
    return current

def get_generation_service() -> GenerationService:
    """Reply provider for chat turns; tests override this dependency."""
    return gemini_chat_service

def get_session_gate(
    generator: GenerationService = Depends(get_generation_service),
) -> SessionCreditGate:
    return SessionCreditGate(
        accounts=AccountStore(),
        transcripts=TranscriptStore(),
        generator=generator,
        history_window=settings.history_window,
        retry_limit=settings.credit_retry_limit,
    )
