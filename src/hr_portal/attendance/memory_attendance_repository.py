from __future__ import annotations

import threading
from datetime import date, time
from typing import Optional, Sequence

from ..core.enums import AttendanceStatus
from .model import AttendanceRecord
from .repository import AttendanceRepository


class InMemoryAttendanceRepository(AttendanceRepository):
    def __init__(self):
        self._by_subject_date: dict[tuple[str, date], AttendanceRecord] = {}
        self._id = 0
        self._lock = threading.Lock()

    def upsert(
        self,
        *,
        subject_id: str,
        work_date: date,
        status: AttendanceStatus,
        check_in_time: Optional[time],
        check_out_time: Optional[time],
    ) -> AttendanceRecord:
        key = (str(subject_id), work_date)
        with self._lock:
            existing = self._by_subject_date.get(key)
            if existing:
                attendance_id = existing.attendance_id
            else:
                self._id += 1
                attendance_id = str(self._id)
            rec = AttendanceRecord(
                attendance_id=attendance_id,
                subject_id=key[0],
                work_date=work_date,
                status=status,
                check_in_time=check_in_time,
                check_out_time=check_out_time,
            )
            self._by_subject_date[key] = rec
            return rec

    def get_for_subject_and_date(self, subject_id: str, work_date: date) -> Optional[AttendanceRecord]:
        return self._by_subject_date.get((str(subject_id), work_date))

    def list_range(
        self,
        *,
        start_date: date,
        end_date: date,
        subject_id: Optional[str] = None,
    ) -> Sequence[AttendanceRecord]:
        items = [
            r
            for r in self._by_subject_date.values()
            if start_date <= r.work_date <= end_date and (subject_id is None or r.subject_id == str(subject_id))
        ]
        items.sort(key=lambda r: (r.work_date, r.subject_id))
        return items
