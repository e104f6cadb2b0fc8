from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class SessionUser:
    """What we store into the Flask session after login."""

    user_id: str
    email: str
    role: Role
    token: Optional[str] = None


@dataclass(frozen=True)
class LocalAccount:
    """Account known to the in-memory backend (development and tests)."""

    user_id: str
    email: str
    password_hash: str
    role: Role
    name: str = ""
    department: str = "General"
    position: str = "Employee"
