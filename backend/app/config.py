# app/config.py
import os
from pydantic import BaseModel
from dotenv import load_dotenv

load_dotenv()  # Load environment variables from .env file

class Settings(BaseModel):
    # General app settings
    APP_NAME: str = "MindMate API"
    env: str = os.getenv("ENV", "dev")

    # Host & Port settings
    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "8000"))

    # CORS origins for frontend
    CORS_ORIGINS: list[str] = [
        "http://localhost:5173",
        "http://127.0.0.1:5173",
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]

    # Gemini API Settings (chat companion replies)
    gemini_api_key: str | None = os.getenv("GEMINI_API_KEY")
    gemini_api_base: str = os.getenv("GEMINI_API_URL", "https://generativelanguage.googleapis.com/v1beta")
    gemini_model: str = os.getenv("GEMINI_MODEL", "gemini-1.5-flash-latest")
    gemini_timeout_sec: float = float(os.getenv("GEMINI_TIMEOUT_SEC", "60"))
    chat_temperature: float = float(os.getenv("CHAT_TEMPERATURE", "0.7"))

    # Credits
    starting_credits: int = int(os.getenv("STARTING_CREDITS", "20"))  # Granted once at registration
    credit_retry_limit: int = int(os.getenv("CREDIT_RETRY_LIMIT", "10"))  # Attempts before surfacing CREDIT_CONFLICT

    # Conversation context sent to the model
    history_window: int = int(os.getenv("CHAT_HISTORY_WINDOW", "20"))

settings = Settings()  # Instantiate configuration
