from __future__ import annotations

from typing import Any

from ..models import UserProfile
from .base import BaseClient, eq

PROFILE_SELECT = "*,organization:organizations(*)"


class ProfileClient(BaseClient):
    def get_user_profile(self, user_id: str) -> UserProfile:
        data = self._select(
            "users",
            {"select": PROFILE_SELECT, "id": eq(user_id)},
            single=True,
            module="profile",
        )
        return UserProfile.model_validate(data)

    def update_user_profile(self, user_id: str, updates: dict[str, Any]) -> UserProfile:
        data = self._update("users", {"id": eq(user_id)}, updates, single=True, module="profile")
        return UserProfile.model_validate(data)
