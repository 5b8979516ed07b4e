# app/core/bootstrap.py
"""
First-run setup: make sure the admin panel has at least one account that can open it.
"""
import os
import logging
from app.config import settings
from app.models.user import User
from app.core.security import hash_password

logger = logging.getLogger("uvicorn.error")

async def ensure_default_admin() -> None:
    """
    Create an admin account when the database has none.

    Needs ADMIN_PASSWORD in the environment; without it nothing is created so
    a fresh deployment never ships a guessable admin. ADMIN_USERNAME defaults
    to "admin" and gets a numeric suffix if a regular user already took it.
    """
    if await User.filter(role="admin").exists():
        return

    admin_password = os.getenv("ADMIN_PASSWORD")
    if not admin_password:
        logger.warning("[bootstrap] No admin present, but ADMIN_PASSWORD not set -> skip creating default admin.")
        return

    base_username = os.getenv("ADMIN_USERNAME", "admin").strip().lower()
    admin_username = base_username
    suffix = 1
    while await User.filter(username=admin_username).exists():
        suffix += 1
        admin_username = f"{base_username}{suffix}"

    u = await User.create(
        username=admin_username,
        email=os.getenv("ADMIN_EMAIL"),
        password_hash=hash_password(admin_password),
        role="admin",
        credits=settings.starting_credits,
    )
    logger.warning("[bootstrap] Created default admin -> username=%s id=%s", u.username, u.id)
