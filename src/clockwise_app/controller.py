from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Any

from clockwise_sdk import ApiError, ApiSession, ClientConfig, ClientValidationError
from clockwise_sdk.exceptions import AuthError, ValidationError
from clockwise_sdk.models import DeviceInfo, GeoPoint, RegistrationResult, UserProfile, UserRole

from clockwise_app.assistant import ChatTranscript
from clockwise_app.device import LocationProvider, LocationUnavailableError, get_device_info
from clockwise_app.error_presenter import UNEXPECTED_ERROR_MESSAGE, ErrorPresenter
from clockwise_app.face_matching import DEFAULT_MATCH_THRESHOLD
from clockwise_app.guard import reconcile
from clockwise_app.permission_gate import PermissionDraft
from clockwise_app.renderer import SUSPENDED_MESSAGE, RenderedView, resolve_view
from clockwise_app.screens import Screen, parse_screen
from clockwise_app.services import (
    AttendanceService,
    AuthService,
    FaceService,
    NotificationService,
    OrganizationService,
    ProfileService,
)
from clockwise_app.state import AppState

logger = logging.getLogger(__name__)

MANAGER_ROLES = frozenset({UserRole.MANAGER, UserRole.ADMIN})
ACTIVE_EMPLOYEE_LIMIT = 100
PENDING_EMPLOYEE_LIMIT = 50

_EMPLOYEE_STATUS_MESSAGES = {
    "pending": "Your account is pending approval. Please wait for your manager to approve your registration.",
    "suspended": "Your account has been suspended. Please contact your administrator.",
    "inactive": "Your account is inactive. Please contact your administrator.",
}
_MANAGER_STATUS_MESSAGES = {
    "pending": "Your manager account is pending approval. Please wait for administrator approval.",
    "suspended": "Your account has been suspended. Please contact the system administrator.",
    "inactive": "Your account is inactive. Please contact the system administrator.",
}
DUPLICATE_SUBMISSION_MESSAGE = "This action is already in progress."


@dataclass(frozen=True)
class ActionResult:
    ok: bool
    screen: Screen
    error_message: str | None = None
    data: Any = None


def week_bounds(today: date, week_offset: int = 0) -> tuple[date, date]:
    """Sunday-to-Saturday week containing ``today``, shifted by ``week_offset`` weeks."""
    days_since_sunday = (today.weekday() + 1) % 7
    start = today - timedelta(days=days_since_sunday) + timedelta(weeks=week_offset)
    return start, start + timedelta(days=6)


def _blocking_status(profile: UserProfile) -> str | None:
    status = profile.effective_status
    if status in {"pending", "suspended"}:
        return status
    if not profile.is_active:
        return "inactive"
    return None


class AppController:
    def __init__(
        self,
        session: ApiSession,
        *,
        config: ClientConfig | None = None,
        location_provider: LocationProvider | None = None,
        device_info: Callable[[], DeviceInfo] = get_device_info,
        today: Callable[[], date] = date.today,
        presenter: ErrorPresenter | None = None,
    ) -> None:
        self.session = session
        self.state = AppState()
        self.location_provider = location_provider or LocationProvider.from_env()
        self.device_info = device_info
        self.today = today
        self.presenter = presenter or ErrorPresenter()
        threshold = config.face_match_threshold if config else DEFAULT_MATCH_THRESHOLD
        self.auth_service = AuthService(session)
        self.profile_service = ProfileService(session)
        self.attendance_service = AttendanceService(session)
        self.notification_service = NotificationService(session)
        self.organization_service = OrganizationService(session)
        self.face_service = FaceService(session, threshold=threshold)

    def _reconcile(self) -> None:
        reconcile(self.state, self._forced_sign_out)

    def _forced_sign_out(self) -> None:
        profile = self.state.auth.profile
        logger.warning("forced_sign_out", extra={"screen": self.state.screen.value})
        self._clear_session()
        if profile is not None:
            self.state.blocked_status = profile.status
            self.state.status_message = SUSPENDED_MESSAGE

    def _clear_session(self) -> None:
        self.auth_service.sign_out()
        self.state.reset_session_scoped()

    def _result(self, data: Any = None) -> ActionResult:
        return ActionResult(
            ok=self.state.error_message is None,
            screen=self.state.screen,
            error_message=self.state.error_message,
            data=data,
        )

    def _perform(self, operation: str, action: Callable[[], Any], *, error_prefix: str = "") -> ActionResult:
        if operation in self.state.in_flight:
            logger.warning("duplicate_submission", extra={"operation": operation})
            return ActionResult(ok=False, screen=self.state.screen, error_message=DUPLICATE_SUBMISSION_MESSAGE)
        self.state.in_flight.add(operation)
        self.state.error_message = None
        data = None
        try:
            data = action()
        except Exception as exc:
            presented = self.presenter.present(exc, action=operation)
            logger.exception(
                "action_failed",
                extra={"operation": operation, "category": presented.category, "trace_id": presented.details["trace_id"]},
            )
            self.state.error_message = f"{error_prefix}{presented.user_message}"
        finally:
            self.state.in_flight.discard(operation)
        self._reconcile()
        self.state.last_result = {"operation": operation, "ok": self.state.error_message is None}
        return self._result(data)

    def start(self) -> ActionResult:
        self.state.loading = True
        try:
            user = self.auth_service.current_user()
            if user is not None:
                self.state.auth.user = user
                self.state.auth.profile = self.profile_service.load_profile()
        except Exception:
            # Startup failures leave the app signed out on the splash screen.
            logger.exception("session_restore_failed")
            self.session.clear()
            self.state.auth.clear()
        finally:
            self.state.loading = False
        self._reconcile()
        logger.info("app_started", extra={"screen": self.state.screen.value, "has_session": self.state.auth.has_session})
        return self._result()

    def set_screen(self, screen: Screen | str) -> ActionResult:
        target = parse_screen(screen)
        if target is not self.state.screen:
            logger.info("navigation", extra={"from_screen": self.state.screen.value, "to_screen": target.value})
        self.state.screen = target
        if target is Screen.PERMISSIONS and self.state.permission_draft is None:
            self.state.permission_draft = PermissionDraft(self.state.permissions)
        self._reconcile()
        return self._result()

    def set_active_tab(self, tab: str) -> ActionResult:
        self.state.active_tab = tab
        self._reconcile()
        return self._result()

    def render(self) -> RenderedView:
        return resolve_view(self.state)

    def login_employee(self, email: str, password: str) -> ActionResult:
        if not email.strip():
            return self._reject("Please enter your email or employee ID")
        if not password:
            return self._reject("Please enter your password")
        return self._perform("login", lambda: self._login(email, password, manager=False))

    def login_manager(self, email: str, password: str) -> ActionResult:
        if not email.strip():
            return self._reject("Please enter your email")
        if not password:
            return self._reject("Please enter your password")
        return self._perform("manager_login", lambda: self._login(email, password, manager=True))

    def _reject(self, message: str) -> ActionResult:
        self.state.error_message = message
        return self._result()

    def _login(self, email: str, password: str, *, manager: bool) -> None:
        try:
            auth_session = self.auth_service.sign_in(email, password)
        except (AuthError, ValidationError, ClientValidationError) as exc:
            self.state.error_message = exc.message or "Invalid email or password"
            return
        except ApiError as exc:
            self.state.error_message = self.presenter.message_for(exc, action="login")
            return
        self.state.blocked_status = None
        try:
            profile = self.profile_service.load_profile()
        except ApiError:
            logger.warning("profile_fetch_failed", exc_info=True)
            profile = None

        if profile is None:
            if manager:
                self._reject_login("Unable to retrieve profile. Please try again.")
                return
            # Authenticated without a profile yet, as on a first login.
            self.state.auth.user = auth_session.user
            self.state.active_tab = "home"
            self.state.screen = Screen.PERMISSIONS
            self.state.permission_draft = PermissionDraft(self.state.permissions)
            return

        is_manager = profile.role in MANAGER_ROLES
        if manager and not is_manager:
            self._reject_login("This login is for managers only. Please use Employee Login.")
            return
        if not manager and is_manager:
            self._reject_login("Please use Manager Login for manager/admin accounts")
            return
        blocking = _blocking_status(profile)
        if blocking is not None:
            messages = _MANAGER_STATUS_MESSAGES if manager else _EMPLOYEE_STATUS_MESSAGES
            self._reject_login(messages[blocking])
            return

        self.state.auth.user = auth_session.user
        self.state.auth.profile = profile
        if manager:
            self.state.screen = Screen.MANAGER_DASHBOARD
        else:
            self.state.active_tab = "home"
            self.state.screen = Screen.PERMISSIONS
            self.state.permission_draft = PermissionDraft(self.state.permissions)
        logger.info("login_routed", extra={"screen": self.state.screen.value, "role": profile.role})

    def _reject_login(self, message: str) -> None:
        self.state.error_message = message
        self._clear_session()

    def sign_out(self) -> ActionResult:
        self._clear_session()
        self.state.error_message = None
        self.state.screen = Screen.LOGIN
        self._reconcile()
        return self._result()

    def refresh_profile(self) -> ActionResult:
        def action() -> UserProfile | None:
            profile = self.profile_service.load_profile()
            self.state.auth.profile = profile
            return profile

        return self._perform("refresh_profile", action)

    def grant_permission(self, key: str) -> ActionResult:
        if self.state.permission_draft is None:
            self.state.permission_draft = PermissionDraft(self.state.permissions)
        self.state.permission_draft.grant(key)
        self._reconcile()
        return self._result(self.state.permission_draft.can_continue)

    def continue_from_permissions(self) -> ActionResult:
        draft = self.state.permission_draft or PermissionDraft(self.state.permissions)
        committed = draft.commit()
        if committed is None:
            message = f"All permissions are required to continue. Missing: {', '.join(draft.current.missing())}"
            return ActionResult(ok=False, screen=self.state.screen, error_message=message)
        self.state.permissions = committed
        self.state.permission_draft = None
        self.state.screen = Screen.EMPLOYEE_DASHBOARD
        self._reconcile()
        return self._result()

    def clock_in(self, notes: str = "") -> ActionResult:
        def action():
            location = self.location_provider.current_location()
            event = self.attendance_service.clock_in(location, self.device_info(), notes)
            self.state.is_clocked = True
            self.state.screen = Screen.CLOCK_IN_SUCCESS
            return event

        return self._perform("clock_in", action, error_prefix="Clock in failed: ")

    def clock_out(self, notes: str = "") -> ActionResult:
        def action():
            location = self.location_provider.current_location()
            event = self.attendance_service.clock_out(location, self.device_info(), notes)
            self.state.is_clocked = False
            self.state.on_break = False
            self.state.screen = Screen.CLOCK_OUT_SUCCESS
            return event

        return self._perform("clock_out", action, error_prefix="Clock out failed: ")

    def start_break(self, break_type: str = "short", notes: str = "") -> ActionResult:
        def action():
            event = self.attendance_service.start_break(break_type, notes)
            self.state.on_break = True
            return event

        return self._perform("start_break", action, error_prefix="Failed to start break: ")

    def end_break(self, notes: str = "") -> ActionResult:
        def action():
            event = self.attendance_service.end_break(notes)
            self.state.on_break = False
            return event

        return self._perform("end_break", action, error_prefix="Failed to end break: ")

    def load_schedule(self, week_offset: int = 0) -> ActionResult:
        def action():
            start, end = week_bounds(self.today(), week_offset)
            self.state.schedule = self.attendance_service.schedule(start, end)
            return self.state.schedule

        return self._perform("load_schedule", action)

    def load_timesheet(self, week_offset: int = 0) -> ActionResult:
        start, _ = week_bounds(self.today(), week_offset)
        return self._perform("load_timesheet", lambda: self.attendance_service.timesheet(start))

    def load_notifications(self, limit: int = 50) -> ActionResult:
        def action():
            self.state.notifications = self.notification_service.list(limit)
            return self.state.notifications

        return self._perform("load_notifications", action)

    def mark_notification_read(self, notification_id: str) -> ActionResult:
        def action():
            updated = self.notification_service.mark_read(notification_id)
            self.state.notifications = [
                updated if item.id == notification_id else item for item in self.state.notifications
            ]
            return updated

        return self._perform("mark_notification_read", action)

    def mark_all_notifications_read(self) -> ActionResult:
        def action():
            count = self.notification_service.mark_all_read()
            self.state.notifications = [
                item.model_copy(update={"is_read": True}) for item in self.state.notifications
            ]
            return count

        return self._perform("mark_all_notifications_read", action)

    def load_manager_dashboard(self) -> ActionResult:
        def action():
            dashboard = self.state.manager_dashboard
            dashboard.error_message = None
            dashboard.stats = self.organization_service.dashboard_stats()
            dashboard.employees = self.organization_service.employees("active", ACTIVE_EMPLOYEE_LIMIT)
            dashboard.pending_employees = self.organization_service.employees("pending", PENDING_EMPLOYEE_LIMIT)
            return dashboard

        result = self._perform("load_manager_dashboard", action)
        if not result.ok:
            self.state.manager_dashboard.error_message = result.error_message
        return result

    def approve_employee(self, user_id: str) -> ActionResult:
        def action() -> str:
            employee_number = self.organization_service.approve(user_id, self.today())
            dashboard = self.state.manager_dashboard
            dashboard.pending_employees = [item for item in dashboard.pending_employees if item.user_id != user_id]
            return employee_number

        return self._perform(f"approve_employee:{user_id}", action, error_prefix="Failed to approve employee: ")

    def register_organization(self, fields: Mapping[str, Any]) -> ActionResult:
        return self._perform("register_organization", lambda: self._registered(
            self.organization_service.register_organization(fields)
        ))

    def register_employee(self, fields: Mapping[str, Any]) -> ActionResult:
        return self._perform("register_employee", lambda: self._registered(
            self.organization_service.register_employee(fields)
        ))

    def _registered(self, outcome: RegistrationResult) -> RegistrationResult:
        if not outcome.success:
            self.state.error_message = outcome.error or "An unexpected error occurred during registration"
            return outcome
        # Registration ends signed out; the account waits for approval.
        self.state.reset_session_scoped()
        self.state.status_message = outcome.message or "Ready"
        self.state.screen = Screen.LOGIN
        return outcome

    def enroll_face(self, descriptor: list[float], image: bytes, confidence: float) -> ActionResult:
        def action():
            location = self._optional_location()
            enrollment = self.face_service.enroll(descriptor, image, confidence, self.device_info(), location)
            if not enrollment.success:
                self.state.error_message = enrollment.message or UNEXPECTED_ERROR_MESSAGE
            return enrollment

        return self._perform("enroll_face", action)

    def verify_face(self, captured: list[float], verification_type: str = "clock_in") -> ActionResult:
        def action():
            location = self._optional_location()
            match, record = self.face_service.verify(captured, verification_type, self.device_info(), location)
            if not match.passed:
                self.state.error_message = match.failure_message
            return record

        return self._perform("verify_face", action)

    def _optional_location(self) -> GeoPoint | None:
        try:
            return self.location_provider.current_location()
        except LocationUnavailableError:
            logger.info("location_unavailable")
            return None

    def ask_assistant(self, text: str) -> ActionResult:
        role = "manager" if self.state.screen in {Screen.MANAGER_AI_CHAT, Screen.AI_ANALYTICS} else "employee"
        transcript = self.state.chats.setdefault(role, ChatTranscript(role))
        reply = transcript.send(text)
        self._reconcile()
        return self._result(reply)
