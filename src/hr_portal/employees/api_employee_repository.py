from __future__ import annotations

from typing import Optional, Sequence

from ..api.client import ApiClient, record_id
from ..common.datetime_utils import to_datetime
from ..core.enums import Role
from ..core.exceptions import ExternalServiceError
from .model import Employee
from .repository import EmployeeRepository


class ApiEmployeeRepository(EmployeeRepository):
    def __init__(self, client: ApiClient):
        self._client = client

    def list_all(self) -> Sequence[Employee]:
        body = self._client.get("/user/get-users")
        users = (body.get("data") or {}).get("users") or []
        return [_to_employee(raw) for raw in users]

    def get_profile(self, employee_id: str) -> Optional[Employee]:
        # The backend resolves the user from the bearer token, not from an id.
        try:
            body = self._client.get("/user/get-user")
        except ExternalServiceError as e:
            if e.status_code == 404:
                return None
            raise
        raw = body.get("data")
        return _to_employee(raw) if raw else None


def _display_name(raw: dict) -> str:
    full = " ".join(p for p in (raw.get("firstName"), raw.get("lastName")) if p)
    return str(raw.get("name") or full or raw.get("username") or raw.get("email") or "")


def _to_employee(raw: dict) -> Employee:
    role = Role.ADMIN if str(raw.get("role") or "").lower() == Role.ADMIN.value else Role.USER
    return Employee(
        employee_id=record_id(raw),
        name=_display_name(raw),
        email=str(raw.get("email") or ""),
        position=raw.get("position") or "Employee",
        department=raw.get("department") or "General",
        role=role,
        joined_at=to_datetime(raw.get("joinDate") or raw.get("createdAt")),
        active=not raw.get("deletedAt"),
        phone_number=raw.get("phoneNumber") or raw.get("phone"),
    )
