from __future__ import annotations

import copy
import re
from dataclasses import dataclass, field
from datetime import date
from typing import Any

import pytest

from clockwise_sdk.exceptions import ApiError, AuthError, NotFoundError, ServerError, TransportError, ValidationError
from clockwise_sdk.models import (
    AuthSession,
    AuthUser,
    BreakEvent,
    ClockEvent,
    DashboardStats,
    DeviceInfo,
    EmployeeSummary,
    FaceDescriptorRecord,
    FaceEnrollment,
    FaceVerification,
    Notification,
    ProfileStatus,
    Shift,
    UserProfile,
    UserRole,
)

from clockwise_app.controller import DUPLICATE_SUBMISSION_MESSAGE, AppController, week_bounds
from clockwise_app.device import LocationProvider
from clockwise_app.permission_gate import PermissionSet
from clockwise_app.renderer import SUSPENDED_MESSAGE, ViewKind
from clockwise_app.screens import Screen, UnknownScreenError

TODAY = date(2026, 10, 14)
ALL_GRANTED = PermissionSet(location=True, camera=True, motion=True, notifications=True)


def _api_error(cls: type[ApiError], message: str, status: int = 400) -> ApiError:
    return cls(code="ERR", message=message, details=None, trace_id="trace", status_code=status)


def _profile(
    role: UserRole = UserRole.EMPLOYEE,
    status: ProfileStatus = ProfileStatus.ACTIVE,
    employee_status: str | None = None,
    is_active: bool = True,
    organization_id: str | None = "org1",
) -> UserProfile:
    return UserProfile(
        id="user-1",
        full_name="Ana Diaz",
        role=role,
        status=status,
        employee_status=employee_status,
        is_active=is_active,
        organization_id=organization_id,
    )


@dataclass
class FakeAuthClient:
    user: AuthUser = field(default_factory=lambda: AuthUser(id="user-1", email="ana@example.com"))
    sign_in_error: Exception | None = None
    sign_up_error: Exception | None = None
    sign_out_error: Exception | None = None
    sign_in_calls: int = 0
    sign_out_calls: int = 0
    sign_ups: list[tuple[str, dict[str, Any]]] = field(default_factory=list)

    def sign_in(self, email: str, password: str) -> AuthSession:
        self.sign_in_calls += 1
        if self.sign_in_error:
            raise self.sign_in_error
        return AuthSession(access_token="jwt", user=self.user)

    def sign_up(self, email: str, password: str, metadata: dict[str, Any] | None = None) -> AuthUser:
        if self.sign_up_error:
            raise self.sign_up_error
        self.sign_ups.append((email, metadata or {}))
        return AuthUser(id="new-user", email=email)

    def sign_out(self) -> None:
        self.sign_out_calls += 1
        if self.sign_out_error:
            raise self.sign_out_error

    def get_user(self) -> AuthUser | None:
        return self.user


@dataclass
class FakeProfileClient:
    profile: UserProfile | None = None
    error: Exception | None = None

    def get_user_profile(self, user_id: str) -> UserProfile:
        if self.error:
            raise self.error
        if self.profile is None:
            raise _api_error(NotFoundError, "no rows", 406)
        return self.profile


@dataclass
class FakeAttendanceClient:
    clock_error: Exception | None = None
    clock_ins: list[dict[str, Any]] = field(default_factory=list)
    clock_outs: list[dict[str, Any]] = field(default_factory=list)
    schedule_requests: list[tuple[str, str]] = field(default_factory=list)
    during_clock_in: Any = None

    def clock_in(self, **kwargs: Any) -> ClockEvent:
        self.clock_ins.append(kwargs)
        if self.during_clock_in:
            self.during_clock_in()
        if self.clock_error:
            raise self.clock_error
        return ClockEvent(success=True, clock_entry_id="entry-1")

    def clock_out(self, **kwargs: Any) -> ClockEvent:
        self.clock_outs.append(kwargs)
        if self.clock_error:
            raise self.clock_error
        return ClockEvent(success=True, clock_entry_id="entry-1")

    def start_break(self, **kwargs: Any) -> BreakEvent:
        return BreakEvent(break_id="break-1", break_type=kwargs["break_type"])

    def end_break(self, **kwargs: Any) -> BreakEvent:
        return BreakEvent(break_id="break-1")

    def get_my_schedule(self, start_date: str, end_date: str) -> list[Shift]:
        self.schedule_requests.append((start_date, end_date))
        return [Shift(shift_date=start_date, start_time="08:00", end_time="16:00")]

    def get_my_timesheet(self, week_start_date: str) -> list:
        return []


@dataclass
class FakeNotificationsClient:
    items: list[Notification] = field(
        default_factory=lambda: [
            Notification(id="n-1", title="Shift tomorrow", is_read=False),
            Notification(id="n-2", title="Approved", is_read=False),
        ]
    )

    def get_my_notifications(self, limit: int = 50) -> list[Notification]:
        return self.items[:limit]

    def mark_notification_as_read(self, notification_id: str) -> Notification:
        return Notification(id=notification_id, title="Shift tomorrow", is_read=True)

    def mark_all_notifications_as_read(self, user_id: str) -> int:
        return len(self.items)


@dataclass
class FakeOrganizationClient:
    stats_error: Exception | None = None
    register_error: Exception | None = None
    searches: list[tuple[str | None, int]] = field(default_factory=list)
    approvals: list[tuple[str, str, str]] = field(default_factory=list)

    def get_dashboard_stats(self) -> DashboardStats:
        if self.stats_error:
            raise self.stats_error
        return DashboardStats(total_employees=7)

    def search_employees(self, *, status: str | None = None, limit: int = 50, **_: Any) -> list[EmployeeSummary]:
        self.searches.append((status, limit))
        if status == "pending":
            return [EmployeeSummary(user_id="emp-1"), EmployeeSummary(user_id="emp-2")]
        return [EmployeeSummary(user_id="emp-9")]

    def approve_employee(self, user_id: str, employee_number: str, hire_date: str) -> dict:
        self.approvals.append((user_id, employee_number, hire_date))
        return {"success": True}

    def register_employee(self, user_id: str, fields: Any) -> dict:
        if self.register_error:
            raise self.register_error
        return {"success": True}

    def register_organization(self, admin_user_id: str, fields: Any) -> dict:
        if self.register_error:
            raise self.register_error
        return {"success": True, "message": "Organization submitted"}


@dataclass
class FakeFaceClient:
    enrolled: list[float] = field(default_factory=lambda: [0.0, 0.0])
    verifications: list[dict[str, Any]] = field(default_factory=list)
    enrollments: list[dict[str, Any]] = field(default_factory=list)

    def enroll_face(self, **kwargs: Any) -> FaceEnrollment:
        self.enrollments.append(kwargs)
        return FaceEnrollment(success=True, action="created")

    def get_face_descriptor(self, user_id: str) -> FaceDescriptorRecord:
        return FaceDescriptorRecord(descriptor=self.enrolled)

    def verify_face(self, **kwargs: Any) -> FaceVerification:
        self.verifications.append(kwargs)
        return FaceVerification(success=True, passed=kwargs["similarity_score"] >= 0.6)


@dataclass
class FakeStorageClient:
    uploads: list[tuple[str, str, bytes]] = field(default_factory=list)

    def upload(self, bucket: str, path: str, content: bytes, content_type: str = "image/jpeg") -> str:
        self.uploads.append((bucket, path, content))
        return path

    def public_url(self, bucket: str, path: str) -> str:
        return f"https://project.supabase.co/storage/v1/object/public/{bucket}/{path}"


class FakeSession:
    def __init__(self, profile: UserProfile | None = None, token: str | None = None) -> None:
        self.token = token
        self.user: AuthUser | None = AuthUser(id="user-1") if token else None
        self.cleared = 0
        self._auth = FakeAuthClient()
        self._profile = FakeProfileClient(profile=profile)
        self._attendance = FakeAttendanceClient()
        self._notifications = FakeNotificationsClient()
        self._organization = FakeOrganizationClient()
        self._face = FakeFaceClient()
        self._storage = FakeStorageClient()

    def auth_client(self) -> FakeAuthClient:
        return self._auth

    def profile_client(self) -> FakeProfileClient:
        return self._profile

    def attendance_client(self) -> FakeAttendanceClient:
        return self._attendance

    def notifications_client(self) -> FakeNotificationsClient:
        return self._notifications

    def organization_client(self) -> FakeOrganizationClient:
        return self._organization

    def face_client(self) -> FakeFaceClient:
        return self._face

    def storage_client(self) -> FakeStorageClient:
        return self._storage

    def establish(self, auth_session: AuthSession) -> None:
        self.token = auth_session.access_token
        self.user = auth_session.user

    def clear(self) -> None:
        self.cleared += 1
        self.token = None
        self.user = None


def _device() -> DeviceInfo:
    return DeviceInfo(
        platform="Linux-6",
        system="Linux",
        release="6",
        machine="x86_64",
        hostname="kiosk",
        timezone="UTC",
        app_version="0.4.0",
    )


def _controller(session: FakeSession, location: LocationProvider | None = None) -> AppController:
    controller = AppController(
        session,  # type: ignore[arg-type]
        location_provider=location or LocationProvider(latitude=40.7, longitude=-74.0),
        device_info=_device,
        today=lambda: TODAY,
    )
    controller.start()
    return controller


def _signed_in(profile: UserProfile | None = None, screen: Screen | None = None) -> tuple[AppController, FakeSession]:
    session = FakeSession(profile=profile or _profile(), token="jwt")
    controller = _controller(session)
    controller.state.permissions = ALL_GRANTED
    if screen is not None:
        controller.set_screen(screen)
    return controller, session


def test_start_without_session_stays_on_splash() -> None:
    controller = _controller(FakeSession())

    assert controller.state.loading is False
    assert controller.state.screen is Screen.SPLASH
    assert controller.render().kind is ViewKind.SCREEN


def test_protected_screen_without_session_goes_to_login() -> None:
    controller = _controller(FakeSession())

    result = controller.set_screen("employeeDashboard")

    assert result.screen is Screen.LOGIN
    assert controller.render().title == "Employee Login"


def test_unknown_screen_is_rejected_without_state_change() -> None:
    controller, _ = _signed_in(screen=Screen.MY_SCHEDULE)

    with pytest.raises(UnknownScreenError):
        controller.set_screen("payroll")
    assert controller.state.screen is Screen.MY_SCHEDULE


def test_set_screen_twice_matches_once() -> None:
    controller, _ = _signed_in()
    controller.set_screen("notifications")
    snapshot = copy.deepcopy(controller.state)

    controller.set_screen("notifications")

    assert controller.state == snapshot


def test_stored_suspended_session_is_signed_out_once() -> None:
    session = FakeSession(profile=_profile(status=ProfileStatus.SUSPENDED), token="jwt")
    controller = AppController(
        session,  # type: ignore[arg-type]
        location_provider=LocationProvider(latitude=1.0, longitude=2.0),
        device_info=_device,
    )
    controller.state.screen = Screen.CLOCK_IN

    controller.start()

    assert session._auth.sign_out_calls == 1
    assert controller.state.screen is Screen.LOGIN
    assert controller.state.auth.has_session is False


def test_pending_profile_renders_pending_view_without_navigation() -> None:
    controller, _ = _signed_in(_profile(status=ProfileStatus.PENDING), screen=Screen.EMPLOYEE_DASHBOARD)

    view = controller.render()

    assert view.kind is ViewKind.PENDING_APPROVAL
    assert controller.state.screen is Screen.EMPLOYEE_DASHBOARD


def test_profile_without_organization_goes_to_signup() -> None:
    controller, _ = _signed_in(_profile(organization_id=None), screen=Screen.MY_SCHEDULE)

    assert controller.state.screen is Screen.SIGNUP


def test_refresh_profile_suspension_forces_sign_out() -> None:
    controller, session = _signed_in(screen=Screen.MY_SCHEDULE)
    session._profile.profile = _profile(status=ProfileStatus.TERMINATED)

    controller.refresh_profile()

    assert controller.state.screen is Screen.LOGIN
    assert session._auth.sign_out_calls == 1
    assert session.token is None


def test_login_requires_email_then_password() -> None:
    controller = _controller(FakeSession())

    assert controller.login_employee("  ", "pw").error_message == "Please enter your email or employee ID"
    assert controller.login_employee("ana@example.com", "").error_message == "Please enter your password"
    assert controller.login_manager("", "pw").error_message == "Please enter your email"


def test_login_shows_backend_message() -> None:
    session = FakeSession()
    session._auth.sign_in_error = _api_error(AuthError, "Invalid login credentials")
    controller = _controller(session)

    result = controller.login_employee("ana@example.com", "wrong")

    assert result.ok is False
    assert result.error_message == "Invalid login credentials"
    assert controller.state.auth.has_session is False


def test_login_falls_back_to_generic_credentials_message() -> None:
    session = FakeSession()
    session._auth.sign_in_error = _api_error(AuthError, "")
    controller = _controller(session)

    assert controller.login_employee("ana@example.com", "wrong").error_message == "Invalid email or password"


def test_login_without_profile_keeps_session() -> None:
    controller = _controller(FakeSession(profile=None))

    result = controller.login_employee("ana@example.com", "secret1")

    assert result.ok
    assert result.screen is Screen.PERMISSIONS
    assert controller.state.auth.has_session
    assert controller.state.auth.profile is None


@pytest.mark.parametrize(
    ("profile", "message"),
    [
        (_profile(role=UserRole.MANAGER), "Please use Manager Login for manager/admin accounts"),
        (_profile(role=UserRole.ADMIN), "Please use Manager Login for manager/admin accounts"),
        (
            _profile(employee_status="pending"),
            "Your account is pending approval. Please wait for your manager to approve your registration.",
        ),
        (
            _profile(employee_status="suspended"),
            "Your account has been suspended. Please contact your administrator.",
        ),
        (_profile(is_active=False), "Your account is inactive. Please contact your administrator."),
    ],
)
def test_employee_login_rejections_sign_out(profile: UserProfile, message: str) -> None:
    session = FakeSession(profile=profile)
    controller = _controller(session)

    result = controller.login_employee("ana@example.com", "secret1")

    assert result.error_message == message
    assert session._auth.sign_out_calls == 1
    assert session.token is None
    assert controller.state.auth.has_session is False


def test_employee_login_success_routes_to_permissions() -> None:
    controller = _controller(FakeSession(profile=_profile()))
    controller.set_active_tab("schedule")

    result = controller.login_employee("ana@example.com", "secret1")

    assert result.ok
    assert result.screen is Screen.PERMISSIONS
    assert controller.state.active_tab == "home"
    assert controller.state.auth.profile is not None


def test_manager_login_paths() -> None:
    employee = _controller(FakeSession(profile=_profile()))
    assert employee.login_manager("ana@example.com", "secret1").error_message == (
        "This login is for managers only. Please use Employee Login."
    )

    missing = _controller(FakeSession(profile=None))
    assert missing.login_manager("lee@example.com", "secret1").error_message == (
        "Unable to retrieve profile. Please try again."
    )

    manager = _controller(FakeSession(profile=_profile(role=UserRole.MANAGER)))
    result = manager.login_manager("lee@example.com", "secret1")
    assert result.ok
    assert result.screen is Screen.MANAGER_DASHBOARD


def test_permissions_flow_commits_on_fourth_grant() -> None:
    controller = _controller(FakeSession(profile=_profile()))
    controller.login_employee("ana@example.com", "secret1")

    for key in ("location", "camera", "motion"):
        assert controller.grant_permission(key).data is False
    rejected = controller.continue_from_permissions()
    assert rejected.ok is False
    assert rejected.error_message == "All permissions are required to continue. Missing: notifications"
    assert controller.state.screen is Screen.PERMISSIONS

    assert controller.grant_permission("notifications").data is True
    result = controller.continue_from_permissions()

    assert result.screen is Screen.EMPLOYEE_DASHBOARD
    assert controller.state.permissions.all_granted()


def test_clock_in_success() -> None:
    controller, session = _signed_in(screen=Screen.CLOCK_IN)

    result = controller.clock_in()

    assert result.ok
    assert controller.state.is_clocked is True
    assert controller.state.screen is Screen.CLOCK_IN_SUCCESS
    sent = session._attendance.clock_ins[0]
    assert sent["location"].latitude == 40.7
    assert '"hostname":"kiosk"' in sent["device_info"]


def test_clock_in_failure_message() -> None:
    controller, session = _signed_in(screen=Screen.CLOCK_IN)
    session._attendance.clock_error = _api_error(ValidationError, "Already clocked in")

    result = controller.clock_in()

    assert result.error_message == "Clock in failed: Already clocked in"
    assert controller.state.is_clocked is False
    assert controller.state.screen is Screen.CLOCK_IN


def test_clock_in_without_location() -> None:
    session = FakeSession(profile=_profile(), token="jwt")
    controller = _controller(session, location=LocationProvider())
    controller.state.permissions = ALL_GRANTED
    controller.set_screen(Screen.CLOCK_IN)

    result = controller.clock_in()

    assert result.error_message == "Clock in failed: Geolocation is not available on this device"
    assert session._attendance.clock_ins == []


def test_second_clock_in_while_in_flight_is_rejected() -> None:
    controller, session = _signed_in(screen=Screen.CLOCK_IN)
    nested: list = []
    session._attendance.during_clock_in = lambda: nested.append(controller.clock_in())

    result = controller.clock_in()

    assert result.ok
    assert nested[0].ok is False
    assert nested[0].error_message == DUPLICATE_SUBMISSION_MESSAGE
    assert len(session._attendance.clock_ins) == 1
    assert controller.state.in_flight == set()


def test_clock_out_and_breaks() -> None:
    controller, session = _signed_in(screen=Screen.TAKE_BREAK)
    controller.state.is_clocked = True

    assert controller.start_break("meal").ok
    assert controller.state.on_break is True
    assert controller.end_break().ok
    assert controller.state.on_break is False

    controller.set_screen(Screen.CLOCK_OUT)
    result = controller.clock_out()

    assert result.screen is Screen.CLOCK_OUT_SUCCESS
    assert controller.state.is_clocked is False
    session._attendance.clock_error = _api_error(ServerError, "boom", 500)
    controller.set_screen(Screen.CLOCK_OUT)
    assert controller.clock_out().error_message == "Clock out failed: Service error. Please try again shortly."


def test_week_bounds_start_on_sunday() -> None:
    assert week_bounds(date(2026, 10, 14)) == (date(2026, 10, 11), date(2026, 10, 17))
    assert week_bounds(date(2026, 10, 11)) == (date(2026, 10, 11), date(2026, 10, 17))
    assert week_bounds(date(2026, 10, 17), week_offset=1) == (date(2026, 10, 18), date(2026, 10, 24))
    assert week_bounds(date(2026, 10, 14), week_offset=-1) == (date(2026, 10, 4), date(2026, 10, 10))


def test_load_schedule_uses_week_window() -> None:
    controller, session = _signed_in(screen=Screen.MY_SCHEDULE)

    controller.load_schedule(week_offset=1)

    assert session._attendance.schedule_requests == [("2026-10-18", "2026-10-24")]
    assert controller.state.schedule[0].shift_date == "2026-10-18"


def test_notifications_mark_read() -> None:
    controller, _ = _signed_in(screen=Screen.NOTIFICATIONS)
    controller.load_notifications()

    controller.mark_notification_read("n-1")
    assert [item.is_read for item in controller.state.notifications] == [True, False]

    result = controller.mark_all_notifications_read()
    assert result.data == 2
    assert all(item.is_read for item in controller.state.notifications)


def test_manager_dashboard_defaults_stats_on_error() -> None:
    controller, session = _signed_in(_profile(role=UserRole.MANAGER), screen=Screen.MANAGER_DASHBOARD)
    session._organization.stats_error = _api_error(ServerError, "function missing", 500)

    result = controller.load_manager_dashboard()

    assert result.ok
    dashboard = controller.state.manager_dashboard
    assert dashboard.stats == DashboardStats()
    assert session._organization.searches == [("active", 100), ("pending", 50)]
    assert [item.user_id for item in dashboard.pending_employees] == ["emp-1", "emp-2"]


def test_approve_employee_removes_from_pending() -> None:
    controller, session = _signed_in(_profile(role=UserRole.MANAGER), screen=Screen.MANAGER_DASHBOARD)
    controller.load_manager_dashboard()

    result = controller.approve_employee("emp-1")

    user_id, employee_number, hire_date = session._organization.approvals[0]
    assert user_id == "emp-1"
    assert re.fullmatch(r"EMP2026\d{4}", employee_number)
    assert hire_date == "2026-10-14"
    assert result.data == employee_number
    assert [item.user_id for item in controller.state.manager_dashboard.pending_employees] == ["emp-2"]


def test_register_employee_ends_signed_out() -> None:
    session = FakeSession()
    controller = _controller(session)
    controller.set_screen(Screen.SIGNUP)

    result = controller.register_employee(
        {
            "organization_id": "org1",
            "email": "sam@example.com",
            "password": "secret1",
            "first_name": "Sam",
            "last_name": "Lee",
            "role": "manager",
        }
    )

    assert result.ok
    assert result.data.requires_approval is True
    assert "pending approval from your administrator" in result.data.message
    assert controller.state.screen is Screen.LOGIN
    assert session._auth.sign_ups[0][1]["role"] == "manager"
    assert session._auth.sign_out_calls == 1


def test_register_organization_duplicate_email() -> None:
    session = FakeSession()
    session._auth.sign_up_error = _api_error(ValidationError, "User already registered", 422)
    controller = _controller(session)
    controller.set_screen(Screen.SIGNUP)

    result = controller.register_organization(
        {
            "organization_name": "Acme",
            "admin_email": "boss@acme.test",
            "admin_password": "secret1",
            "admin_first_name": "Lee",
            "admin_last_name": "Park",
        }
    )

    assert result.error_message == (
        "This email is already registered. Please use a different email or try logging in."
    )
    assert controller.state.screen is Screen.SIGNUP


def test_register_organization_validation_message() -> None:
    controller = _controller(FakeSession())

    result = controller.register_organization({"organization_name": "A"})

    assert result.error_message == "Organization name must be at least 2 characters"


def test_verify_face_below_threshold() -> None:
    controller, session = _signed_in(screen=Screen.CLOCK_IN)

    result = controller.verify_face([0.5, 0.0])

    assert result.error_message == "Similarity too low: 50.0% (required: 60%)"
    assert session._face.verifications[0]["similarity_score"] == pytest.approx(0.5)


def test_verify_face_passes() -> None:
    controller, _ = _signed_in(screen=Screen.CLOCK_IN)

    result = controller.verify_face([0.1, 0.0])

    assert result.ok
    assert result.data.passed is True


def test_ask_assistant_uses_screen_role() -> None:
    controller, _ = _signed_in(_profile(role=UserRole.MANAGER), screen=Screen.MANAGER_AI_CHAT)

    result = controller.ask_assistant("any overtime trends?")

    assert "Overtime Analysis" in result.data.text
    assert len(controller.state.chats["manager"].messages) == 3


def test_sign_out_returns_to_login() -> None:
    controller, session = _signed_in(screen=Screen.MY_SCHEDULE)

    result = controller.sign_out()

    assert result.screen is Screen.LOGIN
    assert session.token is None
    assert controller.state.auth.has_session is False
    assert controller.state.schedule == []


def test_enroll_face_uploads_image_first() -> None:
    controller, session = _signed_in(screen=Screen.SETTINGS)

    result = controller.enroll_face([0.1, 0.2], b"jpeg-bytes", confidence=0.97)

    assert result.ok
    assert session._storage.uploads == [("face-images", "user-1/enrollment.jpg", b"jpeg-bytes")]
    enrollment = session._face.enrollments[0]
    assert enrollment["face_image_url"].endswith("/face-images/user-1/enrollment.jpg")
    assert enrollment["location"].longitude == -74.0


def test_suspension_keeps_suspended_view_until_sign_out() -> None:
    controller, session = _signed_in(screen=Screen.MY_SCHEDULE)
    session._profile.profile = _profile(status=ProfileStatus.SUSPENDED)

    controller.refresh_profile()

    view = controller.render()
    assert view.kind is ViewKind.SUSPENDED
    assert view.render()["status"] == "suspended"
    assert controller.state.screen is Screen.LOGIN
    assert controller.state.status_message == SUSPENDED_MESSAGE
    assert session._auth.sign_out_calls == 1

    controller.sign_out()

    assert controller.render().kind is ViewKind.SCREEN
    assert controller.render().title == "Employee Login"


def test_stored_terminated_session_renders_suspended_view() -> None:
    session = FakeSession(profile=_profile(status=ProfileStatus.TERMINATED), token="jwt")

    controller = _controller(session)

    assert controller.render().kind is ViewKind.SUSPENDED
    assert controller.state.auth.has_session is False


def test_login_after_suspension_clears_marker() -> None:
    controller, session = _signed_in(screen=Screen.MY_SCHEDULE)
    session._profile.profile = _profile(status=ProfileStatus.SUSPENDED)
    controller.refresh_profile()
    session._profile.profile = _profile()

    result = controller.login_employee("ana@example.com", "secret1")

    assert result.ok
    assert controller.state.blocked_status is None
    assert controller.render().kind is ViewKind.SCREEN


def test_login_transport_failure_uses_fixed_message() -> None:
    session = FakeSession()
    session._auth.sign_in_error = _api_error(
        TransportError, "HTTPSConnectionPool(host='x.supabase.co', port=443): Max retries exceeded", 0
    )
    controller = _controller(session)

    result = controller.login_employee("ana@example.com", "secret1")

    assert result.error_message == "Unable to reach the server. Please check your connection and try again."


def test_manager_login_server_failure_uses_fixed_message() -> None:
    session = FakeSession()
    session._auth.sign_in_error = _api_error(ServerError, "upstream connect error", 502)
    controller = _controller(session)

    result = controller.login_manager("lee@example.com", "secret1")

    assert result.error_message == "Service error. Please try again shortly."


def test_register_employee_succeeds_when_remote_logout_fails() -> None:
    session = FakeSession()
    session._auth.sign_out_error = _api_error(ServerError, "logout failed", 500)
    controller = _controller(session)
    controller.set_screen(Screen.SIGNUP)

    result = controller.register_employee(
        {
            "organization_id": "org1",
            "email": "sam@example.com",
            "password": "secret1",
            "first_name": "Sam",
            "last_name": "Lee",
        }
    )

    assert result.ok
    assert result.data.success is True
    assert controller.state.screen is Screen.LOGIN
    assert controller.state.auth.has_session is False
    assert session.token is None


def test_work_screens_wait_for_permissions() -> None:
    session = FakeSession(profile=_profile(), token="jwt")
    controller = _controller(session)

    result = controller.set_screen(Screen.CLOCK_IN)

    assert result.screen is Screen.PERMISSIONS
    assert controller.render().title == "Enable Permissions"
    assert controller.set_screen(Screen.MY_SCHEDULE).screen is Screen.MY_SCHEDULE

    for key in ("location", "camera", "motion", "notifications"):
        controller.grant_permission(key)
    assert controller.continue_from_permissions().screen is Screen.EMPLOYEE_DASHBOARD

    assert controller.set_screen(Screen.CLOCK_IN).screen is Screen.CLOCK_IN


def test_start_failure_clears_stored_session() -> None:
    session = FakeSession(profile=_profile(), token="jwt")
    session._profile.error = _api_error(ServerError, "boom", 500)

    controller = _controller(session)

    assert session.cleared == 1
    assert session.token is None
    assert controller.state.auth.has_session is False
    assert controller.state.screen is Screen.SPLASH
