from __future__ import annotations

import logging
import random
from collections.abc import Mapping
from datetime import date
from typing import Any

from clockwise_sdk import ApiSession
from clockwise_sdk.exceptions import ApiError, ClientValidationError
from clockwise_sdk.models import DashboardStats, EmployeeSummary, RegistrationResult
from clockwise_sdk.validation import validate_employee_registration, validate_organization_registration

logger = logging.getLogger(__name__)

ALREADY_REGISTERED_MESSAGE = "This email is already registered. Please use a different email or try logging in."
REGISTRATION_FALLBACK_ERROR = "An unexpected error occurred during registration"
ORGANIZATION_SUBMITTED_MESSAGE = (
    "Organization registration submitted successfully! Your organization is currently under review. "
    "You will receive a notification once approved."
)


def new_employee_number(today: date | None = None, rng: random.Random | None = None) -> str:
    year = (today or date.today()).year
    return f"EMP{year}{(rng or random).randint(0, 9999):04d}"


def _signup_error(exc: ApiError) -> str:
    if "already registered" in (exc.message or "").lower():
        return ALREADY_REGISTERED_MESSAGE
    return exc.message or REGISTRATION_FALLBACK_ERROR


class OrganizationService:
    def __init__(self, session: ApiSession) -> None:
        self.session = session

    def dashboard_stats(self) -> DashboardStats:
        try:
            return self.session.organization_client().get_dashboard_stats()
        except ApiError as exc:
            logger.warning("dashboard_stats_unavailable", extra={"code": exc.code, "trace_id": exc.trace_id})
            return DashboardStats()

    def employees(self, status: str, limit: int) -> list[EmployeeSummary]:
        return self.session.organization_client().search_employees(status=status, limit=limit)

    def approve(self, user_id: str, today: date | None = None) -> str:
        hire_date = today or date.today()
        employee_number = new_employee_number(hire_date)
        self.session.organization_client().approve_employee(user_id, employee_number, hire_date.isoformat())
        logger.info("employee_approved", extra={"user_id": user_id, "employee_number": employee_number})
        return employee_number

    def register_organization(self, fields: Mapping[str, Any]) -> RegistrationResult:
        try:
            validate_organization_registration(fields)
        except ClientValidationError as exc:
            return RegistrationResult(success=False, error=exc.message)
        metadata = {
            "first_name": fields["admin_first_name"],
            "last_name": fields["admin_last_name"],
            "phone": fields.get("admin_phone"),
            "role": "admin",
        }
        try:
            user = self.session.auth_client().sign_up(fields["admin_email"], fields["admin_password"], metadata)
        except ApiError as exc:
            logger.warning("organization_signup_failed", extra={"code": exc.code})
            return RegistrationResult(success=False, error=_signup_error(exc))
        try:
            data = self.session.organization_client().register_organization(user.id, fields)
        except ApiError as exc:
            logger.exception("organization_registration_failed", extra={"user_id": user.id})
            return RegistrationResult(success=False, error=f"Failed to create organization: {exc.message}")
        self._end_registration_session()
        message = data.get("message") if isinstance(data, dict) else None
        logger.info("organization_registered", extra={"user_id": user.id})
        return RegistrationResult(
            success=True,
            user_id=user.id,
            requires_approval=True,
            message=message or ORGANIZATION_SUBMITTED_MESSAGE,
            data=data,
        )

    def register_employee(self, fields: Mapping[str, Any]) -> RegistrationResult:
        try:
            validate_employee_registration(fields)
        except ClientValidationError as exc:
            return RegistrationResult(success=False, error=exc.message)
        role = fields.get("role") or "employee"
        metadata = {
            "first_name": fields["first_name"],
            "last_name": fields["last_name"],
            "phone": fields.get("phone") or "",
            "role": role,
        }
        try:
            user = self.session.auth_client().sign_up(fields["email"], fields["password"], metadata)
        except ApiError as exc:
            logger.warning("employee_signup_failed", extra={"code": exc.code})
            return RegistrationResult(success=False, error=_signup_error(exc))
        try:
            data = self.session.organization_client().register_employee(user.id, {**fields, "role": role})
        except ApiError as exc:
            logger.exception("employee_registration_failed", extra={"user_id": user.id})
            return RegistrationResult(success=False, error=f"Failed to create {role} profile: {exc.message}")
        self._end_registration_session()
        approver = "administrator" if role == "manager" else "manager"
        logger.info("employee_registered", extra={"user_id": user.id, "role": role})
        return RegistrationResult(
            success=True,
            user_id=user.id,
            requires_approval=True,
            message=(
                f"Registration submitted successfully! Your account is pending approval from your {approver}. "
                "You will receive an email once approved."
            ),
            data=data,
        )

    def _end_registration_session(self) -> None:
        # New accounts wait for approval, so no session is kept.
        try:
            self.session.auth_client().sign_out()
        except Exception:
            # Registration already succeeded at this point.
            logger.warning("registration_logout_remote_failure", exc_info=True)
        finally:
            self.session.clear()
