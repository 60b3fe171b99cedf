from .attendance import AttendanceClient
from .auth import AuthClient
from .face import FaceClient
from .notifications import NotificationsClient
from .organization import OrganizationClient
from .profile import ProfileClient
from .storage import StorageClient

__all__ = [
    "AttendanceClient",
    "AuthClient",
    "FaceClient",
    "NotificationsClient",
    "OrganizationClient",
    "ProfileClient",
    "StorageClient",
]
