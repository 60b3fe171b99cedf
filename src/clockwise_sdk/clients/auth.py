from __future__ import annotations

from typing import Any

from ..exceptions import AuthError
from ..models import AuthSession, AuthUser
from ..validation import sanitize, validate_credentials, validate_sign_up
from .base import BaseClient


class AuthClient(BaseClient):
    def sign_in(self, email: str, password: str) -> AuthSession:
        validate_credentials(email, password)
        payload = {"email": sanitize(email), "password": password}
        data = self._request(
            "POST",
            "/auth/v1/token",
            params={"grant_type": "password"},
            json_body=payload,
            module="auth",
            operation="sign_in",
        )
        return AuthSession.model_validate(data)

    def sign_up(self, email: str, password: str, metadata: dict[str, Any] | None = None) -> AuthUser:
        validate_sign_up(email, password)
        payload: dict[str, Any] = {"email": sanitize(email), "password": password}
        if metadata:
            payload["data"] = metadata
        data = self._request("POST", "/auth/v1/signup", json_body=payload, module="auth", operation="sign_up")
        # With auto-confirm the service answers with a full session, otherwise with the bare user.
        if isinstance(data, dict) and isinstance(data.get("user"), dict):
            return AuthUser.model_validate(data["user"])
        return AuthUser.model_validate(data)

    def sign_out(self) -> None:
        if not self.access_token:
            return
        self._request("POST", "/auth/v1/logout", module="auth", operation="sign_out")

    def get_user(self) -> AuthUser | None:
        if not self.access_token:
            return None
        try:
            data = self._request("GET", "/auth/v1/user", module="auth", operation="get_user")
        except AuthError:
            return None
        return AuthUser.model_validate(data) if data else None
