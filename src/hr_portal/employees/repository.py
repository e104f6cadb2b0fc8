from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Employee


class EmployeeRepository(Protocol):
    def list_all(self) -> Sequence[Employee]:
        raise NotImplementedError

    def get_profile(self, employee_id: str) -> Optional[Employee]:
        """The signed-in employee's own record."""

        raise NotImplementedError
