from __future__ import annotations

from fastapi import (
    APIRouter,
    Depends,
    HTTPException,
    Query,
    status,
)
from tortoise.expressions import Q

from app.api.v1.deps import require_admin
from app.api.v1.presenters import user_to_dict
from app.models.user import User
from app.schemas.admin import (
    AdminUserListOut,
    AdminUserDetailOut,
    AdminUserUpdateIn,
)
from app.services.account_store import AccountStore, parse_uuid

router = APIRouter(prefix="/admin", tags=["admin"])


async def _count_admins() -> int:
    """Number of accounts with role="admin"; the last one can never be demoted."""
    return await User.filter(role="admin").count()


async def _get_user_or_404(user_id: str) -> User:
    key = parse_uuid(user_id)
    u = await User.get_or_none(id=key) if key else None
    if not u:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="USER_NOT_FOUND")
    return u


@router.get(
    "/users",
    response_model=AdminUserListOut,
    dependencies=[Depends(require_admin)],
)
async def list_users(
    q: str | None = Query(default=None, description="Fuzzy search by username/email"),
    offset: int = Query(0, ge=0),
    limit: int = Query(10, ge=1, le=100),
):
    """
    Paginated account list for the admin table, newest accounts first.

    Raises:
        HTTPException (403): FORBIDDEN_ADMIN_ONLY
    """
    qs = User.all().order_by("-created_at")
    if q:
        qs = qs.filter(Q(username__icontains=q) | Q(email__icontains=q))

    total = await qs.count()
    rows = await qs.offset(offset).limit(limit)
    return {"items": [user_to_dict(u) for u in rows], "offset": offset, "limit": limit, "total": total}


@router.get(
    "/users/{user_id}",
    response_model=AdminUserDetailOut,
    dependencies=[Depends(require_admin)],
)
async def get_user_detail(user_id: str):
    u = await _get_user_or_404(user_id)
    return {"user": user_to_dict(u)}


@router.patch(
    "/users/{user_id}",
    response_model=AdminUserDetailOut,
)
async def update_user(
    user_id: str,
    body: AdminUserUpdateIn,
    current_admin: User = Depends(require_admin),
):
    """
    Edit an account's credit balance, role or ban flag.

    Only the fields present in the body change. Banning takes effect on the
    account's next chat turn; a turn already charged is not affected.

    Raises:
        HTTPException (404): USER_NOT_FOUND
        HTTPException (400): NO_VALID_FIELDS, CANNOT_DEMOTE_SELF, CANNOT_BAN_SELF,
            LAST_ADMIN_FORBIDDEN
    """
    u = await _get_user_or_404(user_id)

    if body.credits is None and body.role is None and body.isBanned is None:
        raise HTTPException(
            status_code=400,
            detail={"code": "NO_VALID_FIELDS", "message": "No valid update fields provided"},
        )

    is_self = str(current_admin.id) == str(u.id)
    if body.role and body.role != u.role:
        if is_self and body.role != "admin":
            raise HTTPException(
                status_code=400,
                detail={"code": "CANNOT_DEMOTE_SELF", "message": "Cannot demote yourself"},
            )
        if u.role == "admin" and body.role == "user" and await _count_admins() <= 1:
            raise HTTPException(
                status_code=400,
                detail={"code": "LAST_ADMIN_FORBIDDEN", "message": "Cannot demote the last admin"},
            )
    if body.isBanned and is_self:
        raise HTTPException(
            status_code=400,
            detail={"code": "CANNOT_BAN_SELF", "message": "Cannot ban yourself"},
        )

    updated = await AccountStore().admin_update(
        u.id,
        credits=body.credits,
        role=body.role,
        is_banned=body.isBanned,
    )
    return {"user": user_to_dict(updated)}
