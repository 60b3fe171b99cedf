from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class UnknownScreenError(ValueError):
    def __init__(self, value: object) -> None:
        super().__init__(f"Unknown screen identifier: {value!r}")
        self.value = value


class Screen(str, Enum):
    SPLASH = "splash"
    LOGIN = "login"
    SIGNUP = "signup"
    MANAGER_LOGIN = "managerLogin"
    PERMISSIONS = "permissions"
    EMPLOYEE_DASHBOARD = "employeeDashboard"
    CLOCK_IN = "clockIn"
    CLOCK_IN_SUCCESS = "clockInSuccess"
    CLOCK_OUT = "clockOut"
    CLOCK_OUT_SUCCESS = "clockOutSuccess"
    MANAGER_DASHBOARD = "managerDashboard"
    OVERTIME_REQUEST = "overtimeRequest"
    SHIFT_MANAGEMENT = "shiftManagement"
    MANAGER_CLOCK_IN_OUT = "managerClockInOut"
    CURRENTLY_CLOCKED = "currentlyClocked"
    STAFF_TODAY = "staffToday"
    AI_ANALYTICS = "aiAnalytics"
    EMPLOYEE_AI_CHAT = "employeeAIChat"
    MANAGER_AI_CHAT = "managerAIChat"
    TAKE_BREAK = "takeBreak"
    NOTIFICATIONS = "notifications"
    MY_SCHEDULE = "mySchedule"
    MY_CLIENTS = "myClients"
    EQUIPMENT_CHECK = "equipmentCheck"
    SETTINGS = "settings"
    DEPARTMENT_DETAIL = "departmentDetail"


PUBLIC_SCREENS: frozenset[Screen] = frozenset(
    {Screen.SPLASH, Screen.LOGIN, Screen.SIGNUP, Screen.MANAGER_LOGIN}
)
PROTECTED_SCREENS: frozenset[Screen] = frozenset(screen for screen in Screen if screen not in PUBLIC_SCREENS)
# Reachable only once every device permission has been acknowledged.
PERMISSION_GATED_SCREENS: frozenset[Screen] = frozenset(
    {Screen.EMPLOYEE_DASHBOARD, Screen.CLOCK_IN, Screen.CLOCK_OUT, Screen.TAKE_BREAK}
)


@dataclass(frozen=True)
class ScreenSpec:
    title: str
    subtitle: str = ""
    back_to: Screen | None = None
    placeholder: bool = False

    @property
    def body(self) -> str:
        return "Feature coming soon!" if self.placeholder else self.subtitle


_EMPLOYEE_HOME = Screen.EMPLOYEE_DASHBOARD
_MANAGER_HOME = Screen.MANAGER_DASHBOARD

SCREEN_REGISTRY: dict[Screen, ScreenSpec] = {
    Screen.SPLASH: ScreenSpec("ClockWise Pro", "Smart workforce time tracking"),
    Screen.LOGIN: ScreenSpec("Employee Login", "Sign in to clock in and view your shifts", back_to=Screen.SPLASH),
    Screen.SIGNUP: ScreenSpec("Create Account", "Register an organization or join one", back_to=Screen.SPLASH),
    Screen.MANAGER_LOGIN: ScreenSpec("Manager Login", "Sign in to manage your team", back_to=Screen.SPLASH),
    Screen.PERMISSIONS: ScreenSpec("Enable Permissions", "ClockWise Pro needs these permissions to work properly"),
    Screen.EMPLOYEE_DASHBOARD: ScreenSpec("Dashboard", "Your shift at a glance"),
    Screen.CLOCK_IN: ScreenSpec("Clock In", "GPS and face verification", back_to=_EMPLOYEE_HOME),
    Screen.CLOCK_IN_SUCCESS: ScreenSpec("Clocked In", "Have a great shift!", back_to=_EMPLOYEE_HOME),
    Screen.CLOCK_OUT: ScreenSpec(
        "Clock Out", "Please ensure all records are updated before clocking out", back_to=_EMPLOYEE_HOME
    ),
    Screen.CLOCK_OUT_SUCCESS: ScreenSpec("Clocked Out", "See you next shift!", back_to=_EMPLOYEE_HOME),
    Screen.MANAGER_DASHBOARD: ScreenSpec("Manager Dashboard", "Team overview and approvals"),
    Screen.OVERTIME_REQUEST: ScreenSpec("Overtime Request", "Request additional hours", back_to=_EMPLOYEE_HOME),
    Screen.SHIFT_MANAGEMENT: ScreenSpec("Shift Management", "Plan and assign shifts", back_to=_MANAGER_HOME),
    Screen.MANAGER_CLOCK_IN_OUT: ScreenSpec("Clock In/Out", "Manager time tracking", back_to=_MANAGER_HOME),
    Screen.CURRENTLY_CLOCKED: ScreenSpec("Currently Clocked In", "Staff on the clock right now", back_to=_MANAGER_HOME),
    Screen.STAFF_TODAY: ScreenSpec("Staff Today", "Present, absent and scheduled", back_to=_MANAGER_HOME),
    Screen.AI_ANALYTICS: ScreenSpec("AI Analytics", "Workforce insights", back_to=_MANAGER_HOME),
    Screen.EMPLOYEE_AI_CHAT: ScreenSpec("AI Assistant", "Ask about shifts, time off, hours...", back_to=_EMPLOYEE_HOME),
    Screen.MANAGER_AI_CHAT: ScreenSpec(
        "AI Assistant", "Ask about analytics, scheduling, reports...", back_to=_MANAGER_HOME
    ),
    Screen.TAKE_BREAK: ScreenSpec("Break Management", "Start and end your breaks", back_to=_EMPLOYEE_HOME),
    Screen.NOTIFICATIONS: ScreenSpec("Notifications", "Alerts, approvals and reminders", back_to=_EMPLOYEE_HOME),
    Screen.MY_SCHEDULE: ScreenSpec("My Schedule", "Your shifts this week", back_to=_EMPLOYEE_HOME),
    Screen.MY_CLIENTS: ScreenSpec("My Clients", "View assigned clients", back_to=_EMPLOYEE_HOME, placeholder=True),
    Screen.EQUIPMENT_CHECK: ScreenSpec(
        "Resources", "Manage equipment & supplies", back_to=_EMPLOYEE_HOME, placeholder=True
    ),
    Screen.SETTINGS: ScreenSpec("Settings", "App preferences", back_to=_EMPLOYEE_HOME, placeholder=True),
    Screen.DEPARTMENT_DETAIL: ScreenSpec(
        "Department Details", "Department information", back_to=_MANAGER_HOME, placeholder=True
    ),
}

_missing = set(Screen) - set(SCREEN_REGISTRY)
if _missing:
    raise RuntimeError(f"Screens without a registry entry: {sorted(screen.value for screen in _missing)}")


def parse_screen(value: Screen | str) -> Screen:
    if isinstance(value, Screen):
        return value
    try:
        return Screen(value)
    except ValueError as exc:
        raise UnknownScreenError(value) from exc


def is_protected(screen: Screen) -> bool:
    return screen in PROTECTED_SCREENS
