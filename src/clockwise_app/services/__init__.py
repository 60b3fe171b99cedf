from .attendance_service import AttendanceService
from .auth_service import AuthService
from .face_service import FaceService
from .notification_service import NotificationService
from .organization_service import OrganizationService
from .profile_service import ProfileService

__all__ = [
    "AttendanceService",
    "AuthService",
    "FaceService",
    "NotificationService",
    "OrganizationService",
    "ProfileService",
]
