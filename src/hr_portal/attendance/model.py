from __future__ import annotations

from dataclasses import dataclass
from datetime import date, time
from typing import Optional

from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class AttendanceRecord:
    """One attendance mark per subject per calendar day."""

    attendance_id: str
    subject_id: str
    work_date: date
    status: AttendanceStatus
    check_in_time: Optional[time] = None
    check_out_time: Optional[time] = None


@dataclass(frozen=True)
class AttendanceSummary:
    present_count: int = 0
    absent_count: int = 0
    late_count: int = 0

    @property
    def total(self) -> int:
        return self.present_count + self.absent_count + self.late_count

    def as_dict(self) -> dict:
        return {
            "present": self.present_count,
            "absent": self.absent_count,
            "late": self.late_count,
            "total": self.total,
        }
