# app/core/errors.py
"""
Typed failures raised by the chat services.

Each error carries the HTTP status and machine-readable code it maps to, so
routers can let them propagate and the handler registered in ``app.main``
renders them in the same ``{"detail": {"code", "message"}}`` shape used by
the rest of the API.
"""


class ChatError(Exception):
    """Base class for every failure a chat operation reports to its caller."""

    status_code: int = 500
    code: str = "CHAT_ERROR"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_detail(self) -> dict:
        return {"code": self.code, "message": self.message}


class NotFoundError(ChatError):
    """Account or session missing. A session owned by someone else is reported the same way."""

    status_code = 404
    code = "NOT_FOUND"


class ForbiddenError(ChatError):
    status_code = 403
    code = "ACCOUNT_BANNED"


class InsufficientCreditsError(ChatError):
    """Balance below one credit; ``credits`` is the balance seen at check time."""

    status_code = 402
    code = "INSUFFICIENT_CREDITS"

    def __init__(self, message: str, credits: int):
        super().__init__(message)
        self.credits = credits

    def to_detail(self) -> dict:
        detail = super().to_detail()
        detail["credits"] = self.credits
        return detail


class InvalidInputError(ChatError):
    status_code = 400
    code = "INVALID_INPUT"


class GenerationFailedError(ChatError):
    """The generation service failed. The credit charged for the turn is kept."""

    status_code = 502
    code = "GENERATION_FAILED"


class CreditConflictError(ChatError):
    """Lost a concurrent credit update; the whole request may be retried."""

    status_code = 409
    code = "CREDIT_CONFLICT"

    def __init__(self, message: str = "Credit balance changed concurrently, please retry"):
        super().__init__(message)
