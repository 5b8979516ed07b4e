from fastapi import APIRouter, Depends, HTTPException, status
from tortoise import timezone
from app.api.v1.deps import get_current_user
from app.api.v1.presenters import journal_to_dict
from app.models.journal_entry import JournalEntry, DEFAULT_JOURNAL_TITLE
from app.models.mood_entry import MOODS
from app.models.user import User
from app.schemas.journal import JournalEntryIn, JournalEntryUpdateIn
from app.services.account_store import parse_uuid

router = APIRouter(prefix="/journal", tags=["journal"])

def _check_mood(value: str | None) -> str:
    mood = (value or "").strip().lower()
    if mood and mood not in MOODS:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST,
                            detail={"code": "INVALID_MOOD", "message": f"associatedMood must be empty or one of {', '.join(MOODS)}"})
    return mood

async def _get_owned(entry_id: str, user: User) -> JournalEntry:
    key = parse_uuid(entry_id)
    entry = await JournalEntry.get_or_none(id=key, user=user) if key else None
    if not entry:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="NOT_FOUND")
    return entry

@router.post("", response_model=dict, status_code=status.HTTP_201_CREATED)
async def create_journal_entry(body: JournalEntryIn, user: User = Depends(get_current_user)):
    """
    Write a journal entry. ``content`` is required; a missing title becomes
    "Untitled Entry" and ``entryDate`` defaults to now.
    """
    content = (body.content or "").strip()
    if not content:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST,
                            detail={"code": "BAD_REQUEST", "message": "Content is required for a journal entry"})
    entry = await JournalEntry.create(
        user=user,
        title=(body.title or "").strip() or DEFAULT_JOURNAL_TITLE,
        content=content,
        entry_date=body.entryDate or timezone.now(),
        associated_mood=_check_mood(body.associatedMood),
    )
    return {"success": True, "data": journal_to_dict(entry)}

@router.get("", response_model=dict)
async def list_journal_entries(user: User = Depends(get_current_user)):
    rows = await JournalEntry.filter(user=user).order_by("-entry_date")
    return {"success": True, "data": {"items": [journal_to_dict(j) for j in rows]}}

@router.get("/{entry_id}", response_model=dict)
async def get_journal_entry(entry_id: str, user: User = Depends(get_current_user)):
    entry = await _get_owned(entry_id, user)
    return {"success": True, "data": journal_to_dict(entry)}

@router.put("/{entry_id}", response_model=dict)
async def update_journal_entry(entry_id: str, body: JournalEntryUpdateIn, user: User = Depends(get_current_user)):
    """
    Update the fields present in the body. Sending an empty title resets it
    to "Untitled Entry"; content cannot be emptied.

    Raises:
        HTTPException (404): NOT_FOUND (missing or owned by another account)
        HTTPException (400): BAD_REQUEST / INVALID_MOOD
    """
    entry = await _get_owned(entry_id, user)
    fields = body.model_dump(exclude_unset=True)
    if "title" in fields:
        entry.title = (body.title or "").strip() or DEFAULT_JOURNAL_TITLE
    if "content" in fields:
        content = (body.content or "").strip()
        if not content:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST,
                                detail={"code": "BAD_REQUEST", "message": "Content cannot be empty"})
        entry.content = content
    if "associatedMood" in fields:
        entry.associated_mood = _check_mood(body.associatedMood)
    await entry.save()
    return {"success": True, "data": journal_to_dict(entry)}

@router.delete("/{entry_id}", response_model=dict)
async def delete_journal_entry(entry_id: str, user: User = Depends(get_current_user)):
    entry = await _get_owned(entry_id, user)
    await entry.delete()
    return {"success": True, "data": {"id": entry_id, "deleted": True}}
