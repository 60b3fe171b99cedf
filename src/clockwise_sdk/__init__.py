from .auth_store import AuthStore
from .config import ClientConfig, ConfigError, load_config
from .exceptions import (
    ApiError,
    AuthError,
    ClientValidationError,
    ConflictError,
    ForbiddenError,
    NotFoundError,
    TransportError,
    ValidationError,
    ValidationIssue,
)
from .http_client import HttpClient
from .models import (
    AuthSession,
    AuthUser,
    DashboardStats,
    EmployeeSummary,
    GeoPoint,
    Notification,
    ProfileStatus,
    SessionData,
    Shift,
    UserProfile,
    UserRole,
)
from .session import ApiSession
from .tracing import TraceContext

__all__ = [
    "ApiError",
    "ApiSession",
    "AuthError",
    "AuthSession",
    "AuthStore",
    "AuthUser",
    "ClientConfig",
    "ClientValidationError",
    "ConfigError",
    "ConflictError",
    "DashboardStats",
    "EmployeeSummary",
    "ForbiddenError",
    "GeoPoint",
    "HttpClient",
    "NotFoundError",
    "Notification",
    "ProfileStatus",
    "SessionData",
    "Shift",
    "TraceContext",
    "TransportError",
    "UserProfile",
    "UserRole",
    "ValidationError",
    "ValidationIssue",
    "load_config",
]
