# app/core/security.py
"""
Password hashing and access tokens.

Tokens carry the account id (``sub``) and role so the admin gate can reject
non-admins before touching the database. Verification of the token is the
only identity check in the app; everything downstream trusts the resolved id.
"""
import os
import datetime as dt
import jwt  # PyJWT
from passlib.context import CryptContext
from dotenv import load_dotenv
from pathlib import Path

ENV_PATH = Path(__file__).resolve().parents[2] / ".env"
load_dotenv(dotenv_path=ENV_PATH)

pwd_context = CryptContext(schemes=["argon2"], deprecated="auto")

JWT_SECRET = os.getenv("JWT_SECRET", "dev-secret")  # Override in every real deployment
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "1440"))  # One day
JWT_ALG = "HS256"

def hash_password(plain: str) -> str:
    """Return an argon2 hash of ``plain``; salted, so two calls never match."""
    return pwd_context.hash(plain)

def verify_password(plain: str, hashed: str) -> bool:
    return pwd_context.verify(plain, hashed)

def create_access_token(user_id: str, role: str) -> str:
    """
    Issue a signed bearer token for an account.

    Args:
        user_id: Account UUID as a string
        role: "user" or "admin"

    Returns:
        Encoded JWT with ``sub``, ``role``, ``iat`` and ``exp`` claims
    """
    now = dt.datetime.now(dt.timezone.utc)
    payload = {
        "sub": user_id,
        "role": role,
        "iat": now,
        "exp": now + dt.timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES),
    }
    return jwt.encode(payload, JWT_SECRET, algorithm=JWT_ALG)

def decode_access_token(token: str) -> dict:
    """
    Validate signature and expiry and return the claims.

    Raises:
        jwt.ExpiredSignatureError: token is past ``exp``
        jwt.InvalidTokenError: token is malformed or signed with another key
    """
    return jwt.decode(token, JWT_SECRET, algorithms=[JWT_ALG])
