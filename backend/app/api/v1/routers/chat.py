from fastapi import APIRouter, Depends, status
from app.api.v1.deps import get_current_user, get_session_gate
from app.api.v1.presenters import iso, turn_to_dict
from app.models.user import User
from app.schemas.chat import PostMessageIn, QuickChatIn, SessionTitleIn, StartSessionIn
from app.services.session_gate import SessionCreditGate

router = APIRouter(prefix="/chat", tags=["chat"])

# Every route below lets app.core.errors.ChatError propagate; the handler in
# app.main turns it into the matching status code.

@router.post("", response_model=dict)
async def quick_chat(
    body: QuickChatIn,
    user: User = Depends(get_current_user),
    gate: SessionCreditGate = Depends(get_session_gate),
):
    """
    Answer one message against client-held history without storing a session.

    Costs one credit.

    Returns:
        dict: ``{"success": True, "data": {"reply": str, "currentCredits": int}}``

    Raises:
        400 INVALID_INPUT, 402 INSUFFICIENT_CREDITS, 403 ACCOUNT_BANNED,
        409 CREDIT_CONFLICT, 502 GENERATION_FAILED
    """
    result = await gate.quick_reply(user.id, body.message, body.history)
    return {"success": True, "data": {"reply": result.reply, "currentCredits": result.credits}}

@router.post("/new", response_model=dict, status_code=status.HTTP_201_CREATED)
async def start_session(
    body: StartSessionIn | None = None,
    user: User = Depends(get_current_user),
    gate: SessionCreditGate = Depends(get_session_gate),
):
    """
    Open a new chat session; costs one credit.

    With ``firstMessage`` the session starts with that user turn followed by
    the assistant reply and is titled after the message. Without it the
    assistant greets first and the title is "Chat from YYYY-MM-DD".

    Returns:
        dict: data with sessionId, sessionTitle, messages, reply, currentCredits
    """
    first_message = body.firstMessage if body else None
    started = await gate.start_session(user.id, first_message)
    return {
        "success": True,
        "data": {
            "sessionId": started.session_id,
            "sessionTitle": started.title,
            "messages": [turn_to_dict(t) for t in started.turns],
            "reply": started.reply,
            "currentCredits": started.credits,
        },
    }

@router.get("/sessions", response_model=dict)
async def list_sessions(
    user: User = Depends(get_current_user),
    gate: SessionCreditGate = Depends(get_session_gate),
):
    """Sessions of the current account, most recently active first, each with a short preview."""
    summaries = await gate.list_sessions(user.id)
    items = [{
        "id": str(s.session.id),
        "title": s.session.title,
        "lastActivity": iso(s.session.last_activity),
        "createdAt": iso(s.session.created_at),
        "preview": s.preview,
    } for s in summaries]
    return {"success": True, "data": {"items": items, "total": len(items)}}

@router.get("/{session_id}", response_model=dict)
async def get_session(
    session_id: str,
    user: User = Depends(get_current_user),
    gate: SessionCreditGate = Depends(get_session_gate),
):
    """
    Full transcript of one session.

    Raises:
        404 NOT_FOUND: session missing, malformed id, or owned by another account
    """
    transcript = await gate.get_transcript(user.id, session_id)
    s = transcript.session
    return {
        "success": True,
        "data": {
            "id": str(s.id),
            "title": s.title,
            "lastActivity": iso(s.last_activity),
            "createdAt": iso(s.created_at),
            "messages": [turn_to_dict(t) for t in transcript.turns],
        },
    }

@router.post("/{session_id}", response_model=dict)
async def post_message(
    session_id: str,
    body: PostMessageIn,
    user: User = Depends(get_current_user),
    gate: SessionCreditGate = Depends(get_session_gate),
):
    """
    Send a message in an existing session; costs one credit.

    The credit is not returned when the model call fails (502).
    """
    result = await gate.post_message(user.id, session_id, body.message)
    return {"success": True, "data": {"reply": result.reply, "currentCredits": result.credits}}

@router.put("/{session_id}/title", response_model=dict)
async def rename_session(
    session_id: str,
    body: SessionTitleIn,
    user: User = Depends(get_current_user),
    gate: SessionCreditGate = Depends(get_session_gate),
):
    session = await gate.rename_session(user.id, session_id, body.title)
    return {"success": True, "data": {"id": str(session.id), "title": session.title}}
