from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from ..attendance.model import AttendanceSummary
from ..attendance.service import AttendanceService
from ..employees.service import EmployeeService
from ..holidays.service import HolidayService
from ..leaves.service import LeaveService


@dataclass(frozen=True)
class DashboardOverview:
    total_employees: int
    attendance_today: AttendanceSummary
    pending_leaves: int
    upcoming_holidays: int
    next_holiday: str

    def as_dict(self) -> dict:
        return {
            "total_employees": self.total_employees,
            "attendance_today": self.attendance_today.as_dict(),
            "pending_leaves": self.pending_leaves,
            "upcoming_holidays": {"count": self.upcoming_holidays, "next": self.next_holiday},
        }


class DashboardService:
    """Admin landing page figures, aggregated from the feature services."""

    def __init__(
        self,
        *,
        employees: EmployeeService,
        attendance: AttendanceService,
        leaves: LeaveService,
        holidays: HolidayService,
    ):
        self._employees = employees
        self._attendance = attendance
        self._leaves = leaves
        self._holidays = holidays

    def overview(self, today: date) -> DashboardOverview:
        upcoming = self._holidays.list_upcoming(today)
        if upcoming:
            nxt = upcoming[0]
            next_label = f"{nxt.name} ({nxt.start_date.strftime('%b')} {nxt.start_date.day})"
        else:
            next_label = "None"

        return DashboardOverview(
            total_employees=self._employees.count_employees(),
            attendance_today=self._attendance.daily_summary(today),
            pending_leaves=self._leaves.count_pending(),
            upcoming_holidays=len(upcoming),
            next_holiday=next_label,
        )
