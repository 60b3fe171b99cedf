from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from clockwise_sdk.exceptions import (
    ApiError,
    AuthError,
    ClientValidationError,
    ForbiddenError,
    NotFoundError,
    RateLimitError,
    ServerError,
    TransportError,
)

from clockwise_app.device import LocationUnavailableError

UNEXPECTED_ERROR_MESSAGE = "An unexpected error occurred. Please try again."


@dataclass(frozen=True)
class PresentedError:
    category: str
    user_message: str
    code: str
    details: dict[str, Any] = field(default_factory=dict)


class ErrorPresenter:
    """Turns failures raised during an action into the inline message shown next to the form."""

    _CATEGORY_MESSAGES = {
        "permission_denied": "You do not have permission to perform this action.",
        "not_found": "The requested record was not found.",
        "rate_limited": "Too many attempts. Please wait a moment and try again.",
        "transport": "Unable to reach the server. Please check your connection and try again.",
        "server": "Service error. Please try again shortly.",
        "unknown": UNEXPECTED_ERROR_MESSAGE,
    }

    def present(self, exc: BaseException, *, action: str) -> PresentedError:
        category, message, code = self._classify(exc)
        return PresentedError(
            category=category,
            user_message=message,
            code=code,
            details={
                "action": action,
                "trace_id": getattr(exc, "trace_id", None),
                "timestamp": datetime.now(timezone.utc).isoformat(),
            },
        )

    def message_for(self, exc: BaseException, *, action: str) -> str:
        return self.present(exc, action=action).user_message

    def _classify(self, exc: BaseException) -> tuple[str, str, str]:
        if isinstance(exc, ClientValidationError):
            return "validation", exc.message, "VALIDATION_ERROR"
        if isinstance(exc, LocationUnavailableError):
            return "location", str(exc), "LOCATION_UNAVAILABLE"
        if isinstance(exc, ApiError):
            code = (exc.code or "UNKNOWN").upper()
            if isinstance(exc, TransportError):
                return "transport", self._CATEGORY_MESSAGES["transport"], code
            if isinstance(exc, ServerError):
                return "server", self._CATEGORY_MESSAGES["server"], code
            if isinstance(exc, RateLimitError):
                return "rate_limited", self._CATEGORY_MESSAGES["rate_limited"], code
            if isinstance(exc, ForbiddenError):
                return "permission_denied", exc.message or self._CATEGORY_MESSAGES["permission_denied"], code
            if isinstance(exc, NotFoundError):
                return "not_found", exc.message or self._CATEGORY_MESSAGES["not_found"], code
            if isinstance(exc, AuthError):
                return "auth", exc.message or "Invalid email or password", code
            # Backend rejections carry a message meant for the user.
            return "backend", exc.message or UNEXPECTED_ERROR_MESSAGE, code
        return "unknown", UNEXPECTED_ERROR_MESSAGE, "UNKNOWN"
