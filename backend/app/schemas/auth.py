"""
Pydantic schemas for authentication endpoints.
"""
from pydantic import BaseModel

class LoginRequest(BaseModel):
    username: str
    password: str  # Plain text, verified against the argon2 hash

class RegisterIn(BaseModel):
    username: str
    email: str | None = None
    password: str

class ChangePasswordIn(BaseModel):
    newPassword: str
