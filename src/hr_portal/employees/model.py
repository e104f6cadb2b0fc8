from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class Employee:
    employee_id: str
    name: str
    email: str
    position: str = "Employee"
    department: str = "General"
    role: Role = Role.USER
    joined_at: Optional[datetime] = None
    active: bool = True
    phone_number: Optional[str] = None
