from __future__ import annotations

from datetime import date, time
from typing import Optional, Protocol, Sequence

from ..core.enums import AttendanceStatus
from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def upsert(
        self,
        *,
        subject_id: str,
        work_date: date,
        status: AttendanceStatus,
        check_in_time: Optional[time],
        check_out_time: Optional[time],
    ) -> AttendanceRecord:
        """Insert, or replace the fields of the existing (subject, date) record."""

        raise NotImplementedError

    def get_for_subject_and_date(self, subject_id: str, work_date: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def list_range(
        self,
        *,
        start_date: date,
        end_date: date,
        subject_id: Optional[str] = None,
    ) -> Sequence[AttendanceRecord]:
        """Records within [start_date, end_date], ascending by date then subject."""

        raise NotImplementedError
