from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class ApiError(Exception):
    code: str
    message: str
    details: object | None
    trace_id: str | None
    status_code: int
    raw_payload: object | None = None

    def __str__(self) -> str:
        trace = f" trace_id={self.trace_id}" if self.trace_id else ""
        return f"[{self.status_code}] {self.code}: {self.message}{trace}"


class AuthError(ApiError):
    """Authentication failed or the session is invalid."""


class ForbiddenError(ApiError):
    """Denied by row level security or a role check."""


class NotFoundError(ApiError):
    pass


class ValidationError(ApiError):
    pass


class ConflictError(ApiError):
    """409 or unique-violation style errors."""


class RateLimitError(ApiError):
    """429 throttling error."""


class ServerError(ApiError):
    """5xx server-side failures."""


class TransportError(ApiError):
    """Network/transport failure before an HTTP response was returned."""


@dataclass(frozen=True)
class ValidationIssue:
    field: str
    message: str


@dataclass
class ClientValidationError(Exception):
    issues: list[ValidationIssue] = field(default_factory=list)

    @property
    def message(self) -> str:
        if not self.issues:
            return "Invalid input"
        return self.issues[0].message

    def __str__(self) -> str:
        return "; ".join(f"{issue.field}: {issue.message}" for issue in self.issues) or "Invalid input"
