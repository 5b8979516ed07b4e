from fastapi import APIRouter, HTTPException, Response, status, Depends
from app.config import settings
from app.core.security import verify_password, create_access_token, hash_password
from app.api.v1.deps import get_current_user
from app.api.v1.presenters import user_to_dict
from app.models.user import User
from app.schemas.auth import LoginRequest, RegisterIn, ChangePasswordIn

router = APIRouter(prefix="/auth", tags=["auth"])

MIN_PASSWORD_LENGTH = 6

def _issue_token(response: Response, user: User) -> str:
    token = create_access_token(str(user.id), user.role)
    response.set_cookie("accessToken", token, httponly=True, secure=False, samesite="lax")
    return token

@router.post("/register")
async def register(body: RegisterIn, response: Response):
    """
    Register a new account and log it in.

    Usernames are trimmed and lowercased, so "Alice" and "alice" are the same
    account. New accounts start with ``settings.starting_credits`` chat credits.

    Returns:
        dict: ``{"success": True, "data": {"user": {...}, "accessToken": str}}``
        or ``{"success": False, "error": {"code", "message"}}``

    Error codes:
        - BAD_REQUEST: Missing username, or password shorter than 6 characters
        - USERNAME_EXISTS: Username already taken
        - EMAIL_EXISTS: Email already registered
    """
    username = (body.username or "").strip().lower()
    if not username or not body.password:
        return {"success": False, "error": {"code": "BAD_REQUEST", "message": "username/password required"}}
    if len(body.password) < MIN_PASSWORD_LENGTH:
        return {"success": False, "error": {"code": "BAD_REQUEST",
                                            "message": f"Password must be at least {MIN_PASSWORD_LENGTH} characters long"}}
    if await User.get_or_none(username=username):
        return {"success": False, "error": {"code": "USERNAME_EXISTS", "message": "Username already exists"}}
    if body.email and await User.get_or_none(email=body.email):
        return {"success": False, "error": {"code": "EMAIL_EXISTS", "message": "Email already registered"}}

    u = await User.create(
        username=username,
        email=(body.email or None),
        password_hash=hash_password(body.password),
        role="user",
        credits=settings.starting_credits,
    )
    token = _issue_token(response, u)
    return {"success": True, "data": {"user": user_to_dict(u), "accessToken": token}}

@router.post("/login")
async def login(payload: LoginRequest, response: Response):
    """
    Exchange credentials for an access token.

    The token is returned in the body and also set as the HttpOnly
    ``accessToken`` cookie.

    Raises:
        HTTPException (401): AUTH_INVALID_CREDENTIALS
    """
    user = await User.get_or_none(username=(payload.username or "").strip().lower())
    if not user or not verify_password(payload.password, user.password_hash):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED,
                            detail={"code": "AUTH_INVALID_CREDENTIALS", "message": "Incorrect username or password"})
    token = _issue_token(response, user)
    return {"success": True, "data": {"user": user_to_dict(user), "accessToken": token}}

@router.get("/me")
async def me(user: User = Depends(get_current_user)):
    """Profile of the logged-in account, including its current credit balance."""
    return {"success": True, "data": user_to_dict(user)}

@router.post("/logout")
async def logout(response: Response):
    """
    Clear the ``accessToken`` cookie. Bearer tokens held by the client stay
    valid until they expire.
    """
    response.delete_cookie("accessToken")
    return {"success": True}

@router.post("/change-password")
async def change_password(body: ChangePasswordIn, user: User = Depends(get_current_user)):
    if len(body.newPassword or "") < MIN_PASSWORD_LENGTH:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST,
                            detail={"code": "BAD_REQUEST",
                                    "message": f"Password must be at least {MIN_PASSWORD_LENGTH} characters long"})
    user.password_hash = hash_password(body.newPassword)
    await user.save(update_fields=["password_hash", "updated_at"])
    return {"success": True, "data": {"ok": True}}
