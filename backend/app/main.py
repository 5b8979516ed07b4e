# app/main.py
import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.config import settings
from app.core.db import init_db, close_db
from app.core.errors import ChatError

from app.api.v1.routers import auth, chat, moods, journal, admin

from app.core.bootstrap import ensure_default_admin
logger = logging.getLogger("uvicorn.error")

app = FastAPI(title=settings.APP_NAME)

# CORS (with Cookie)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.exception_handler(ChatError)
async def chat_error_handler(request: Request, exc: ChatError):
    """Render typed chat failures with the same detail shape as HTTPException."""
    logger.warning("[chat] %s %s -> %s %s", request.method, request.url.path, exc.status_code, exc.code)
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.to_detail()})

@app.on_event("startup")
async def on_startup():
    await init_db()
    await ensure_default_admin()
    if not settings.gemini_api_key:
        logger.warning("[Gemini] GEMINI_API_KEY not set; chat turns will fail with GENERATION_FAILED")

@app.on_event("shutdown")
async def on_shutdown():
    await close_db()

# REST
app.include_router(auth.router, prefix="/api/v1")
app.include_router(chat.router, prefix="/api/v1")
app.include_router(moods.router, prefix="/api/v1")
app.include_router(journal.router, prefix="/api/v1")
app.include_router(admin.router, prefix="/api/v1")

@app.get("/healthz")
def healthz():
    return {"ok": True}
