from __future__ import annotations

import re
from typing import Any, Mapping

from ..models import Branch, DashboardStats, Department, EmployeeSummary, OrganizationSummary
from .base import BaseClient, eq

DEFAULT_COUNTRY = "USA"
DEFAULT_TIMEZONE = "America/New_York"


def slugify(name: str) -> str:
    slug = re.sub(r"[^a-z0-9]+", "-", name.strip().lower())
    return slug.strip("-")


class OrganizationClient(BaseClient):
    def get_dashboard_stats(self) -> DashboardStats:
        data = self._rpc("get_org_dashboard_stats", module="organization")
        return DashboardStats.model_validate(data or {})

    def search_employees(
        self,
        *,
        search_query: str | None = None,
        department_id: str | None = None,
        status: str | None = None,
        limit: int = 50,
        offset: int = 0,
    ) -> list[EmployeeSummary]:
        data = self._rpc(
            "search_employees",
            {
                "search_query": search_query,
                "department_id_param": department_id,
                "status_param": status,
                "limit_param": limit,
                "offset_param": offset,
            },
            module="organization",
        )
        return [EmployeeSummary.model_validate(item) for item in data or []]

    def approve_employee(self, user_id: str, employee_number: str, hire_date: str) -> Any:
        return self._rpc(
            "approve_employee",
            {"emp_user_id": user_id, "emp_number": employee_number, "hire_date_val": hire_date},
            module="organization",
        )

    def register_organization(self, admin_user_id: str, fields: Mapping[str, Any]) -> Any:
        name = str(fields["organization_name"]).strip()
        return self._rpc(
            "register_organization",
            {
                "org_name": name,
                "org_slug": fields.get("organization_slug") or slugify(name),
                "org_category": fields.get("organization_category"),
                "admin_user_id": admin_user_id,
                "admin_email": fields["admin_email"],
                "admin_first_name": fields["admin_first_name"],
                "admin_last_name": fields["admin_last_name"],
                "org_address_line1": fields.get("organization_address") or None,
                "org_city": fields.get("organization_city") or None,
                "org_state": fields.get("organization_state") or None,
                "org_postal_code": fields.get("organization_postal_code") or None,
                "org_country": fields.get("organization_country") or DEFAULT_COUNTRY,
                "org_timezone": fields.get("organization_timezone") or DEFAULT_TIMEZONE,
                "admin_phone": fields.get("admin_phone") or None,
            },
            module="organization",
        )

    def register_employee(self, user_id: str, fields: Mapping[str, Any]) -> Any:
        optional = {
            "emp_phone": "phone",
            "emp_display_name": "display_name",
            "emp_job_title": "job_title",
            "department_id_param": "department_id",
            "branch_id_param": "branch_id",
            "emp_number": "employee_number",
            "date_of_birth_param": "date_of_birth",
            "gender_param": "gender",
            "address_line1_param": "address_line1",
            "address_line2_param": "address_line2",
            "city_param": "city",
            "state_param": "state",
            "postal_code_param": "postal_code",
            "country_param": "country",
            "timezone_param": "timezone",
            "emergency_contact_name_param": "emergency_contact_name",
            "emergency_contact_phone_param": "emergency_contact_phone",
            "emergency_contact_relationship_param": "emergency_contact_relationship",
        }
        params: dict[str, Any] = {
            "org_id": fields["organization_id"],
            "user_id_param": user_id,
            "emp_email": fields["email"],
            "emp_first_name": fields["first_name"],
            "emp_last_name": fields["last_name"],
            "emp_role": fields.get("role") or "employee",
        }
        for param, key in optional.items():
            params[param] = fields.get(key) or None
        return self._rpc("register_employee", params, module="organization")

    def get_departments(self, organization_id: str) -> list[Department]:
        data = self._select(
            "departments",
            {"select": "*", "organization_id": eq(organization_id), "is_active": eq(True), "order": "name"},
            module="organization",
        )
        return [Department.model_validate(item) for item in data or []]

    def get_branches(self, organization_id: str) -> list[Branch]:
        data = self._select(
            "branches",
            {"select": "*", "organization_id": eq(organization_id), "is_active": eq(True), "order": "name"},
            module="organization",
        )
        return [Branch.model_validate(item) for item in data or []]

    def search_organizations(self, query: str) -> list[OrganizationSummary]:
        data = self._select(
            "organizations",
            {
                "select": "id,name,slug,category,city",
                "name": f"ilike.*{query.strip()}*",
                "is_active": eq(True),
                "limit": 10,
            },
            module="organization",
        )
        return [OrganizationSummary.model_validate(item) for item in data or []]
