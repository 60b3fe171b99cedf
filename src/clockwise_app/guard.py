from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

from clockwise_sdk.models import ProfileStatus, UserProfile

from clockwise_app.screens import PERMISSION_GATED_SCREENS, Screen, is_protected
from clockwise_app.state import AppState

logger = logging.getLogger(__name__)

MAX_GUARD_PASSES = 4
BLOCKED_STATUSES = frozenset({ProfileStatus.SUSPENDED, ProfileStatus.TERMINATED})


@dataclass(frozen=True)
class GuardDecision:
    redirect: Screen | None = None
    sign_out: bool = False
    reason: str = "allowed"

    @property
    def changes_state(self) -> bool:
        return self.redirect is not None or self.sign_out


ALLOW = GuardDecision()


def evaluate_guard(
    screen: Screen,
    *,
    has_session: bool,
    profile: UserProfile | None,
    loading: bool,
    permissions_granted: bool = True,
) -> GuardDecision:
    if loading:
        return GuardDecision(reason="loading")

    # A blocked account is signed out wherever it is, not only on protected screens.
    if has_session and profile is not None and profile.status in BLOCKED_STATUSES:
        return GuardDecision(redirect=Screen.LOGIN, sign_out=True, reason=f"account_{profile.status.value}")

    if not is_protected(screen):
        return ALLOW

    if not has_session:
        return GuardDecision(redirect=Screen.LOGIN, reason="no_session")

    if profile is None:
        return ALLOW

    if profile.status is ProfileStatus.PENDING:
        # The renderer substitutes the pending view; the screen itself is kept.
        return GuardDecision(reason="pending_approval")

    if not profile.organization_id and screen is not Screen.SIGNUP:
        return GuardDecision(redirect=Screen.SIGNUP, reason="no_organization")

    if screen in PERMISSION_GATED_SCREENS and not permissions_granted:
        return GuardDecision(redirect=Screen.PERMISSIONS, reason="permissions_required")

    return ALLOW


def reconcile(state: AppState, sign_out: Callable[[], None]) -> list[GuardDecision]:
    """Re-run the guard until the screen is stable.

    Forced redirects re-enter the guard, so this loops to a fixed point.
    ``sign_out`` is invoked at most once per call.
    """
    applied: list[GuardDecision] = []
    signed_out = False
    for _ in range(MAX_GUARD_PASSES):
        decision = evaluate_guard(
            state.screen,
            has_session=state.auth.has_session,
            profile=state.auth.profile,
            loading=state.loading,
            permissions_granted=state.permissions.all_granted(),
        )
        if not decision.changes_state:
            break
        applied.append(decision)
        if decision.sign_out and not signed_out:
            signed_out = True
            sign_out()
        if decision.redirect is not None and decision.redirect is not state.screen:
            logger.info(
                "guard_redirect",
                extra={"from_screen": state.screen.value, "to_screen": decision.redirect.value, "reason": decision.reason},
            )
            state.screen = decision.redirect
        else:
            break
    return applied
