from __future__ import annotations

from dataclasses import dataclass

from .auth_store import AuthStore
from .clients.attendance import AttendanceClient
from .clients.auth import AuthClient
from .clients.face import FaceClient
from .clients.notifications import NotificationsClient
from .clients.organization import OrganizationClient
from .clients.profile import ProfileClient
from .clients.storage import StorageClient
from .config import ClientConfig
from .http_client import HttpClient
from .models import AuthSession, AuthUser, SessionData
from .tracing import TraceContext


@dataclass
class ApiSession:
    config: ClientConfig
    auth_store: AuthStore | None = None
    trace: TraceContext | None = None
    token: str | None = None
    refresh_token: str | None = None
    user: AuthUser | None = None

    def __post_init__(self) -> None:
        self.auth_store = self.auth_store or AuthStore()
        self.trace = self.trace or TraceContext()
        stored = self.auth_store.load()
        if stored and not self.token and stored.env_name == self.config.env_name:
            self.token = stored.access_token
            self.refresh_token = stored.refresh_token
            self.user = stored.user

    def _http(self) -> HttpClient:
        return HttpClient(config=self.config, trace=self.trace)

    def auth_client(self) -> AuthClient:
        return AuthClient(http=self._http(), access_token=self.token)

    def profile_client(self) -> ProfileClient:
        return ProfileClient(http=self._http(), access_token=self.token)

    def attendance_client(self) -> AttendanceClient:
        return AttendanceClient(http=self._http(), access_token=self.token)

    def notifications_client(self) -> NotificationsClient:
        return NotificationsClient(http=self._http(), access_token=self.token)

    def organization_client(self) -> OrganizationClient:
        return OrganizationClient(http=self._http(), access_token=self.token)

    def storage_client(self) -> StorageClient:
        return StorageClient(http=self._http(), access_token=self.token)

    def face_client(self) -> FaceClient:
        return FaceClient(http=self._http(), access_token=self.token)

    def establish(self, auth_session: AuthSession) -> None:
        self.token = auth_session.access_token
        self.refresh_token = auth_session.refresh_token
        self.user = auth_session.user
        self.auth_store.save(
            SessionData(
                access_token=self.token,
                refresh_token=self.refresh_token,
                user=self.user,
                env_name=self.config.env_name,
            )
        )

    def clear(self) -> None:
        self.token = None
        self.refresh_token = None
        self.user = None
        if self.auth_store:
            self.auth_store.clear()
