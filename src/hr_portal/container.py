from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterable, Optional

from werkzeug.security import generate_password_hash

from .api.client import ApiClient, TokenProvider
from .attendance.memory_attendance_repository import InMemoryAttendanceRepository
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .auth.api_auth_gateway import ApiAuthGateway
from .auth.memory_auth_gateway import InMemoryAuthGateway
from .auth.model import LocalAccount
from .auth.service import AuthService
from .core.enums import Role
from .dashboard.service import DashboardService
from .database.connection import DatabaseConnection, DBConfig
from .employees.api_employee_repository import ApiEmployeeRepository
from .employees.memory_employee_repository import InMemoryEmployeeRepository
from .employees.model import Employee
from .employees.repository import EmployeeRepository
from .employees.service import EmployeeService
from .holidays.api_holiday_repository import ApiHolidayRepository
from .holidays.memory_holiday_repository import InMemoryHolidayRepository
from .holidays.repository import HolidayRepository
from .holidays.service import HolidayService
from .leaves.api_leave_repository import ApiLeaveRepository
from .leaves.memory_leave_repository import InMemoryLeaveRepository
from .leaves.model import LeavePolicy
from .leaves.repository import LeaveRepository
from .leaves.service import LeaveService

BACKENDS = ("api", "memory")


@dataclass(frozen=True)
class Container:
    leaves_repo: LeaveRepository
    holidays_repo: HolidayRepository
    attendance_repo: AttendanceRepository
    employees_repo: EmployeeRepository

    auth_service: AuthService
    leave_service: LeaveService
    holiday_service: HolidayService
    attendance_service: AttendanceService
    employee_service: EmployeeService
    dashboard_service: DashboardService


def local_accounts(demo_users: Iterable[dict]) -> list[LocalAccount]:
    return [
        LocalAccount(
            user_id=str(u["user_id"]),
            email=str(u["email"]),
            password_hash=generate_password_hash(str(u["password"])),
            role=Role(u.get("role", Role.USER.value)),
            name=str(u.get("name") or u["email"]),
            department=str(u.get("department") or "General"),
            position=str(u.get("position") or "Employee"),
        )
        for u in demo_users
    ]


def build_container(
    *,
    backend: str = "api",
    api_base_url: str = "",
    api_timeout: float = 10,
    token_provider: Optional[TokenProvider] = None,
    role_provider: Optional[Callable[[], Optional[Role]]] = None,
    db_config: Optional[dict] = None,
    leave_lead_days: Optional[int] = 0,
    demo_users: Iterable[dict] = (),
) -> Container:
    if backend not in BACKENDS:
        raise ValueError(f"Unknown DATA_BACKEND {backend!r}, expected one of {BACKENDS}")

    if backend == "memory":
        accounts = local_accounts(demo_users)
        leaves_repo: LeaveRepository = InMemoryLeaveRepository()
        holidays_repo: HolidayRepository = InMemoryHolidayRepository()
        attendance_repo: AttendanceRepository = InMemoryAttendanceRepository()
        employees_repo: EmployeeRepository = InMemoryEmployeeRepository(
            Employee(
                employee_id=a.user_id,
                name=a.name,
                email=a.email,
                position=a.position,
                department=a.department,
                role=a.role,
            )
            for a in accounts
        )
        auth_service = AuthService(InMemoryAuthGateway(accounts))
    else:
        client = ApiClient(api_base_url, token_provider=token_provider, timeout=api_timeout)
        leaves_repo = ApiLeaveRepository(client)
        holidays_repo = ApiHolidayRepository(client, role_provider=role_provider)
        employees_repo = ApiEmployeeRepository(client)
        # The REST backend has no attendance endpoints; marks are stored locally.
        conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config or {}))
        attendance_repo = MySQLAttendanceRepository(conn)
        auth_service = AuthService(ApiAuthGateway(client))

    leave_service = LeaveService(leaves_repo, policy=LeavePolicy(lead_days=leave_lead_days))
    holiday_service = HolidayService(holidays_repo)
    attendance_service = AttendanceService(attendance_repo)
    employee_service = EmployeeService(employees_repo)
    dashboard_service = DashboardService(
        employees=employee_service,
        attendance=attendance_service,
        leaves=leave_service,
        holidays=holiday_service,
    )

    return Container(
        leaves_repo=leaves_repo,
        holidays_repo=holidays_repo,
        attendance_repo=attendance_repo,
        employees_repo=employees_repo,
        auth_service=auth_service,
        leave_service=leave_service,
        holiday_service=holiday_service,
        attendance_service=attendance_service,
        employee_service=employee_service,
        dashboard_service=dashboard_service,
    )
