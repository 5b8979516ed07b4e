import datetime as dt
from fastapi import APIRouter, Depends, HTTPException, Query, status
from tortoise import timezone
from app.api.v1.deps import get_current_user
from app.api.v1.presenters import mood_to_dict
from app.models.mood_entry import MoodEntry, MOODS
from app.models.user import User
from app.schemas.mood import MoodEntryIn

router = APIRouter(prefix="/moods", tags=["moods"])

@router.post("", response_model=dict, status_code=status.HTTP_201_CREATED)
async def create_mood_entry(body: MoodEntryIn, user: User = Depends(get_current_user)):
    """
    Log a mood.

    ``mood`` is lowercased and must be one of happy/sad/anxious/calm/stressed;
    ``score`` is 0-10 (validated by the schema). ``entryDate`` defaults to now.

    Raises:
        HTTPException (400): INVALID_MOOD
    """
    mood = (body.mood or "").strip().lower()
    if mood not in MOODS:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST,
                            detail={"code": "INVALID_MOOD", "message": f"mood must be one of {', '.join(MOODS)}"})
    entry = await MoodEntry.create(
        user=user,
        mood=mood,
        score=body.score,
        notes=(body.notes or "").strip(),
        entry_date=body.entryDate or timezone.now(),
    )
    return {"success": True, "data": mood_to_dict(entry)}

@router.get("", response_model=dict)
async def list_mood_entries(user: User = Depends(get_current_user)):
    """All mood entries of the current account, newest first."""
    rows = await MoodEntry.filter(user=user).order_by("-entry_date")
    return {"success": True, "data": {"items": [mood_to_dict(m) for m in rows]}}

@router.get("/chart", response_model=dict)
async def mood_chart(user: User = Depends(get_current_user), days: int = Query(7)):
    """
    Mood entries for charting, oldest first.

    Covers today plus the ``days - 1`` days before it, from midnight of the
    first day through the end of today.

    Raises:
        HTTPException (400): INVALID_DAYS when ``days`` is not positive
    """
    if days <= 0:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="INVALID_DAYS")
    now = timezone.now()
    start = (now - dt.timedelta(days=days - 1)).replace(hour=0, minute=0, second=0, microsecond=0)
    end = now.replace(hour=23, minute=59, second=59, microsecond=999999)
    rows = await MoodEntry.filter(user=user, entry_date__gte=start, entry_date__lte=end).order_by("entry_date")
    return {"success": True, "data": {"days": days, "items": [mood_to_dict(m) for m in rows]}}
