"""
Pydantic schemas for admin user management endpoints.
"""
from pydantic import BaseModel, Field
from typing import Optional, List, Literal

class AdminUserBase(BaseModel):
    """Account as shown in the admin table."""
    id: str
    username: str
    email: Optional[str] = None
    role: Literal["user", "admin"]
    credits: int
    isBanned: bool
    createdAt: Optional[str] = None


class AdminUserListOut(BaseModel):
    items: List[AdminUserBase]
    offset: int
    limit: int
    total: int


class AdminUserDetailOut(BaseModel):
    user: AdminUserBase


class AdminUserUpdateIn(BaseModel):
    """
    Admin edits to an account. Only provided fields change; at least one is required.
    """
    credits: Optional[int] = Field(default=None, ge=0)  # Overwrites the balance
    role: Optional[Literal["user", "admin"]] = None  # Cannot demote self or the last admin
    isBanned: Optional[bool] = None
