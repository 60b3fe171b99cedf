from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ProfileStatus(str, Enum):
    PENDING = "pending"
    ACTIVE = "active"
    SUSPENDED = "suspended"
    TERMINATED = "terminated"


class UserRole(str, Enum):
    EMPLOYEE = "employee"
    MANAGER = "manager"
    ADMIN = "admin"


class AuthUser(BaseModel):
    id: str
    email: str | None = None
    phone: str | None = None
    user_metadata: dict[str, Any] = Field(default_factory=dict)
    created_at: str | None = None


class AuthSession(BaseModel):
    access_token: str
    refresh_token: str | None = None
    token_type: str = "bearer"
    expires_in: int | None = None
    expires_at: int | None = None
    user: AuthUser


class SessionData(BaseModel):
    access_token: str
    refresh_token: str | None = None
    user: AuthUser | None = None
    env_name: str


class UserProfile(BaseModel):
    id: str
    email: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    full_name: str | None = None
    role: UserRole | None = None
    status: ProfileStatus | None = None
    employee_status: str | None = None
    is_active: bool = True
    organization_id: str | None = None
    organization: dict[str, Any] | None = None
    employee_number: str | None = None
    job_title: str | None = None

    @property
    def display_name(self) -> str:
        if self.full_name:
            return self.full_name
        parts = [part for part in (self.first_name, self.last_name) if part]
        return " ".join(parts) or "User"

    @property
    def effective_status(self) -> str | None:
        """Account status as used by the login screens; falls back to the profile status."""
        if self.employee_status:
            return self.employee_status.lower()
        return self.status.value if self.status else None


class GeoPoint(BaseModel):
    latitude: float
    longitude: float
    accuracy: float | None = None


class DeviceInfo(BaseModel):
    platform: str
    system: str
    release: str
    machine: str
    hostname: str
    timezone: str
    app_version: str


class ClockEvent(BaseModel):
    model_config = ConfigDict(extra="allow")

    success: bool = True
    clock_entry_id: str | None = None
    message: str | None = None
    timestamp: str | None = None


class BreakEvent(BaseModel):
    model_config = ConfigDict(extra="allow")

    success: bool = True
    break_id: str | None = None
    break_type: str | None = None
    message: str | None = None


class Shift(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: str | None = None
    shift_date: str
    start_time: str | None = None
    end_time: str | None = None
    department_name: str | None = None
    location_name: str | None = None
    status: str | None = None
    notes: str | None = None


class TimesheetDay(BaseModel):
    model_config = ConfigDict(extra="allow")

    work_date: str
    regular_hours: float = 0.0
    overtime_hours: float = 0.0
    break_minutes: int = 0
    status: str | None = None


class Notification(BaseModel):
    id: str
    user_id: str | None = None
    title: str = ""
    message: str = ""
    type: str = "system"
    priority: str | None = None
    is_read: bool = False
    created_at: str | None = None
    read_at: str | None = None


class DashboardStats(BaseModel):
    model_config = ConfigDict(extra="allow")

    total_employees: int = 0
    clocked_in_count: int = 0
    on_break_count: int = 0
    pending_approvals: int = 0
    attendance_rate: float = 0.0
    total_hours_today: float = 0.0


class EmployeeSummary(BaseModel):
    model_config = ConfigDict(extra="allow")

    user_id: str
    full_name: str | None = None
    email: str | None = None
    job_title: str | None = None
    department_name: str | None = None
    status: str | None = None
    employee_number: str | None = None


class RegistrationResult(BaseModel):
    success: bool
    user_id: str | None = None
    requires_approval: bool = False
    message: str | None = None
    error: str | None = None
    data: Any = None


class Department(BaseModel):
    id: str
    name: str
    organization_id: str | None = None


class Branch(BaseModel):
    id: str
    name: str
    organization_id: str | None = None


class OrganizationSummary(BaseModel):
    id: str
    name: str
    slug: str | None = None
    category: str | None = None
    city: str | None = None


class FaceEnrollment(BaseModel):
    success: bool
    descriptor_id: str | None = None
    action: str | None = None
    message: str | None = None


class FaceVerification(BaseModel):
    success: bool
    passed: bool = False
    verification_id: str | None = None
    similarity_score: float | None = None
    threshold: float | None = None
    message: str | None = None


class FaceDescriptorRecord(BaseModel):
    descriptor_id: str | None = None
    descriptor: list[float]
    face_image_url: str | None = None
    face_confidence: float | None = None
    enrolled_at: str | None = None
