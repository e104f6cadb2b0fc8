from __future__ import annotations

from typing import Iterable, Optional, Sequence

from .model import Employee
from .repository import EmployeeRepository


class InMemoryEmployeeRepository(EmployeeRepository):
    def __init__(self, employees: Iterable[Employee] = ()):
        self._items = list(employees)

    def add(self, employee: Employee) -> None:
        self._items.append(employee)

    def list_all(self) -> Sequence[Employee]:
        return list(self._items)

    def get_profile(self, employee_id: str) -> Optional[Employee]:
        return next((e for e in self._items if e.employee_id == str(employee_id)), None)
