from __future__ import annotations

from collections import Counter
from typing import Optional

from ..core.constants import DEFAULT_TOP_DEPARTMENTS
from ..core.exceptions import NotFoundError
from .model import Employee
from .repository import EmployeeRepository


class EmployeeService:
    """Read-only employee directory."""

    def __init__(self, employees: EmployeeRepository):
        self._employees = employees

    def list_employees(self, search: Optional[str] = None) -> list[Employee]:
        items = list(self._employees.list_all())
        term = (search or "").strip().lower()
        if not term:
            return items
        return [
            e
            for e in items
            if term in e.name.lower() or term in e.department.lower() or term in e.position.lower()
        ]

    def get_profile(self, employee_id: str) -> Employee:
        e = self._employees.get_profile(str(employee_id))
        if not e:
            raise NotFoundError("Employee profile not found")
        return e

    def count_employees(self) -> int:
        return len(self._employees.list_all())

    def department_counts(self, top: int = DEFAULT_TOP_DEPARTMENTS) -> list[tuple[str, int]]:
        counts = Counter(e.department for e in self._employees.list_all())
        return counts.most_common(top)

    @staticmethod
    def to_dict(e: Employee) -> dict:
        return {
            "id": e.employee_id,
            "name": e.name,
            "email": e.email,
            "position": e.position,
            "department": e.department,
            "role": e.role.value,
            "join_date": e.joined_at.isoformat() if e.joined_at else None,
            "status": "Active" if e.active else "Inactive",
            "phone_number": e.phone_number,
        }
