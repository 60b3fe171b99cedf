from __future__ import annotations

import re
from typing import Any, Mapping

from .exceptions import ClientValidationError, ValidationIssue

_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
MIN_PASSWORD_LENGTH = 6
EMPLOYEE_ROLES = {"employee", "manager"}


def sanitize(value: Any) -> str:
    if not isinstance(value, str):
        return ""
    return value.strip()


def validate_email(email: Any) -> bool:
    if not isinstance(email, str) or not email:
        return False
    return bool(_EMAIL_RE.match(email.strip()))


def validate_password(password: Any) -> bool:
    if not isinstance(password, str) or not password:
        return False
    return len(password) >= MIN_PASSWORD_LENGTH


def _raise_if_any(issues: list[ValidationIssue]) -> None:
    if issues:
        raise ClientValidationError(issues=issues)


def validate_credentials(email: str, password: str) -> None:
    issues: list[ValidationIssue] = []
    if not validate_email(sanitize(email)):
        issues.append(ValidationIssue("email", "Please enter a valid email address"))
    if not password:
        issues.append(ValidationIssue("password", "Please enter your password"))
    _raise_if_any(issues)


def validate_sign_up(email: str, password: str) -> None:
    issues: list[ValidationIssue] = []
    if not validate_email(sanitize(email)):
        issues.append(ValidationIssue("email", "Please enter a valid email address"))
    if not validate_password(password):
        issues.append(ValidationIssue("password", "Password must be at least 6 characters"))
    _raise_if_any(issues)


def validate_organization_registration(fields: Mapping[str, Any]) -> None:
    issues: list[ValidationIssue] = []
    name = sanitize(fields.get("organization_name"))
    if len(name) < 2:
        issues.append(ValidationIssue("organization_name", "Organization name must be at least 2 characters"))
    if not validate_email(sanitize(fields.get("admin_email"))):
        issues.append(ValidationIssue("admin_email", "Please enter a valid admin email address"))
    if not validate_password(fields.get("admin_password")):
        issues.append(ValidationIssue("admin_password", "Password must be at least 6 characters"))
    if not sanitize(fields.get("admin_first_name")) or not sanitize(fields.get("admin_last_name")):
        issues.append(ValidationIssue("admin_name", "Admin first and last name are required"))
    _raise_if_any(issues)


def validate_employee_registration(fields: Mapping[str, Any]) -> None:
    issues: list[ValidationIssue] = []
    if not fields.get("organization_id"):
        issues.append(ValidationIssue("organization_id", "Organization ID is required"))
    required = ("email", "password", "first_name", "last_name")
    if any(not sanitize(fields.get(key)) for key in required):
        issues.append(ValidationIssue("required", "Email, password, first name, and last name are required"))
    elif not validate_email(sanitize(fields.get("email"))):
        issues.append(ValidationIssue("email", "Please enter a valid email address"))
    role = fields.get("role") or "employee"
    if role not in EMPLOYEE_ROLES:
        issues.append(ValidationIssue("role", f"Unsupported role: {role}"))
    _raise_if_any(issues)
