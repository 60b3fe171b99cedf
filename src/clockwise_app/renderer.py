from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from clockwise_sdk.models import ProfileStatus

from clockwise_app.guard import BLOCKED_STATUSES
from clockwise_app.screens import SCREEN_REGISTRY, Screen, ScreenSpec, is_protected
from clockwise_app.state import AppState

PENDING_MESSAGE = (
    "Your account is awaiting approval from your organization administrator. "
    "You'll receive a notification once your account has been activated."
)
SUSPENDED_MESSAGE = (
    "Your account has been suspended. Please contact your organization administrator for assistance."
)


class ViewKind(str, Enum):
    LOADING = "loading"
    PENDING_APPROVAL = "pending_approval"
    SUSPENDED = "suspended"
    SCREEN = "screen"


@dataclass(frozen=True)
class RenderedView:
    kind: ViewKind
    screen: Screen
    title: str
    body: str
    spec: ScreenSpec | None = None
    detail: dict[str, Any] = field(default_factory=dict)

    def render(self) -> dict[str, Any]:
        return {
            "kind": self.kind.value,
            "screen": self.screen.value,
            "title": self.title,
            "body": self.body,
            **self.detail,
        }


def resolve_view(state: AppState) -> RenderedView:
    """Pick the one view mounted inside the frame for ``state``."""
    auth = state.auth
    profile = auth.profile
    if state.loading:
        return RenderedView(ViewKind.LOADING, state.screen, "Loading...", "")

    if (
        auth.has_session
        and profile is not None
        and profile.status is ProfileStatus.PENDING
        and is_protected(state.screen)
    ):
        return RenderedView(
            ViewKind.PENDING_APPROVAL,
            state.screen,
            "Pending Approval",
            PENDING_MESSAGE,
            detail={"user": profile.display_name, "email": auth.user.email if auth.user else None},
        )

    # Checked on every screen, independently of the guard's own sign-out.
    blocked = profile.status if profile is not None and profile.status in BLOCKED_STATUSES else state.blocked_status
    if blocked is not None:
        return RenderedView(
            ViewKind.SUSPENDED,
            state.screen,
            "Account Suspended",
            SUSPENDED_MESSAGE,
            detail={"status": blocked.value},
        )

    spec = SCREEN_REGISTRY[state.screen]
    detail: dict[str, Any] = {"active_tab": state.active_tab}
    if spec.back_to is not None:
        detail["back_to"] = spec.back_to.value
    if state.error_message:
        detail["error"] = state.error_message
    return RenderedView(ViewKind.SCREEN, state.screen, spec.title, spec.body, spec=spec, detail=detail)
