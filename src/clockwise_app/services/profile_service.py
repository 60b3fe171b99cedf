from __future__ import annotations

import logging

from clockwise_sdk import ApiSession
from clockwise_sdk.exceptions import NotFoundError
from clockwise_sdk.models import UserProfile

logger = logging.getLogger(__name__)


class ProfileService:
    def __init__(self, session: ApiSession) -> None:
        self.session = session

    def load_profile(self) -> UserProfile | None:
        user = self.session.user
        if user is None:
            return None
        logger.info("profile_fetch_attempt", extra={"user_id": user.id})
        try:
            profile = self.session.profile_client().get_user_profile(user.id)
        except NotFoundError:
            logger.warning("profile_missing", extra={"user_id": user.id})
            return None
        logger.info("profile_fetch_success", extra={"user_id": profile.id, "status": profile.effective_status})
        return profile
