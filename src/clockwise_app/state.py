from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from clockwise_sdk.models import (
    AuthUser,
    DashboardStats,
    EmployeeSummary,
    Notification,
    ProfileStatus,
    Shift,
    UserProfile,
)

from clockwise_app.assistant import ChatTranscript
from clockwise_app.permission_gate import PermissionDraft, PermissionSet
from clockwise_app.screens import Screen


@dataclass
class AuthContext:
    user: AuthUser | None = None
    profile: UserProfile | None = None

    @property
    def has_session(self) -> bool:
        return self.user is not None

    def clear(self) -> None:
        self.user = None
        self.profile = None


@dataclass
class ManagerDashboardState:
    stats: DashboardStats = field(default_factory=DashboardStats)
    employees: list[EmployeeSummary] = field(default_factory=list)
    pending_employees: list[EmployeeSummary] = field(default_factory=list)
    error_message: str | None = None


@dataclass
class AppState:
    screen: Screen = Screen.SPLASH
    active_tab: str = "home"
    loading: bool = True
    auth: AuthContext = field(default_factory=AuthContext)
    # Status of an account the guard signed out, kept until the user signs out or logs in again.
    blocked_status: ProfileStatus | None = None
    permissions: PermissionSet = field(default_factory=PermissionSet)
    permission_draft: PermissionDraft | None = None
    is_clocked: bool = False
    on_break: bool = False
    error_message: str | None = None
    status_message: str = "Ready"
    in_flight: set[str] = field(default_factory=set)
    schedule: list[Shift] = field(default_factory=list)
    notifications: list[Notification] = field(default_factory=list)
    manager_dashboard: ManagerDashboardState = field(default_factory=ManagerDashboardState)
    chats: dict[str, ChatTranscript] = field(default_factory=dict)
    last_result: dict[str, Any] | None = None

    def reset_session_scoped(self) -> None:
        self.auth.clear()
        self.blocked_status = None
        self.status_message = "Ready"
        self.is_clocked = False
        self.on_break = False
        self.schedule = []
        self.notifications = []
        self.manager_dashboard = ManagerDashboardState()
        self.chats = {}
        self.permission_draft = None
