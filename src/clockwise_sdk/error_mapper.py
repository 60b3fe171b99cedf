from __future__ import annotations

from typing import Mapping

from .exceptions import (
    ApiError,
    AuthError,
    ConflictError,
    ForbiddenError,
    NotFoundError,
    RateLimitError,
    ServerError,
    ValidationError,
)

# PostgREST answers 406 with this code when a single-row select matched nothing.
NO_ROWS_CODE = "PGRST116"

_AUTH_CODES = {"invalid_grant", "invalid_credentials", "email_not_confirmed", "bad_jwt", "session_not_found"}


def _first_text(payload: Mapping[str, object], *keys: str) -> str | None:
    for key in keys:
        value = payload.get(key)
        if isinstance(value, str) and value.strip():
            return value.strip()
    return None


def map_error(status_code: int, payload: Mapping[str, object] | None, trace_id: str | None) -> ApiError:
    payload = payload or {}
    # Auth responses use error/error_code/msg, the REST layer uses code/message/hint.
    code = _first_text(payload, "error_code", "code", "error")
    if code is None and payload.get("code") is not None:
        code = str(payload.get("code"))
    code = code or "HTTP_ERROR"
    message = _first_text(payload, "message", "msg", "error_description") or "Request failed"
    details = payload.get("details") or payload.get("hint")
    mapped: type[ApiError]
    if status_code == 401 or code in _AUTH_CODES:
        mapped = AuthError
    elif status_code == 403:
        mapped = ForbiddenError
    elif status_code == 404 or code == NO_ROWS_CODE:
        mapped = NotFoundError
    elif status_code in {400, 422}:
        mapped = ValidationError
    elif status_code == 409:
        mapped = ConflictError
    elif status_code == 429:
        mapped = RateLimitError
    elif status_code >= 500:
        mapped = ServerError
    else:
        mapped = ApiError
    return mapped(
        code=code,
        message=message,
        details=details,
        trace_id=trace_id,
        status_code=status_code,
        raw_payload=dict(payload),
    )
