from __future__ import annotations

import logging

from clockwise_sdk import ApiSession
from clockwise_sdk.models import AuthSession, AuthUser

logger = logging.getLogger(__name__)


class AuthService:
    def __init__(self, session: ApiSession) -> None:
        self.session = session

    def has_active_session(self) -> bool:
        return bool(self.session.token)

    def current_user(self) -> AuthUser | None:
        if not self.has_active_session():
            return None
        user = self.session.auth_client().get_user()
        if user is None:
            logger.info("stored_session_rejected")
            self.session.clear()
            return None
        self.session.user = user
        return user

    def sign_in(self, email: str, password: str) -> AuthSession:
        logger.info("login_attempt", extra={"email": email})
        try:
            auth_session = self.session.auth_client().sign_in(email, password)
        except Exception:
            logger.warning("login_failure", extra={"email": email})
            raise
        self.session.establish(auth_session)
        logger.info("login_success", extra={"user_id": auth_session.user.id})
        return auth_session

    def sign_out(self) -> None:
        logger.info("logout")
        try:
            self.session.auth_client().sign_out()
        except Exception:
            # Local state is cleared even when the backend call fails.
            logger.warning("logout_remote_failure", exc_info=True)
        finally:
            self.session.clear()
