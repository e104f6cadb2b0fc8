from __future__ import annotations

import io
import logging
from collections import Counter
from datetime import date, time, timedelta
from typing import Any, Iterable, Mapping, Optional, Union

import pandas as pd

from ..common.datetime_utils import month_bounds, parse_time, to_date
from ..common.validators import require_choice, require_non_empty
from ..core.enums import AttendanceStatus
from ..core.exceptions import ValidationError
from .model import AttendanceRecord, AttendanceSummary
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)

TimeInput = Union[time, str, None]

EXPORT_COLUMNS = ["work_date", "subject_id", "status", "check_in", "check_out"]


def _as_time(value: TimeInput, field: str) -> Optional[time]:
    if value is None or isinstance(value, time):
        return value
    try:
        return parse_time(value)
    except ValidationError:
        raise ValidationError("Invalid time (HH:MM)", field=field)


def _require_date(value: Any, field: str) -> date:
    d = to_date(value)
    if d is None:
        raise ValidationError("Invalid date", field=field)
    return d


def _summarize(records: Iterable[AttendanceRecord]) -> AttendanceSummary:
    c = Counter(r.status for r in records)
    return AttendanceSummary(
        present_count=c[AttendanceStatus.PRESENT],
        absent_count=c[AttendanceStatus.ABSENT],
        late_count=c[AttendanceStatus.LATE],
    )


class AttendanceService:
    def __init__(self, attendance: AttendanceRepository):
        self._attendance = attendance

    def mark(
        self,
        *,
        subject_id: str,
        work_date: Any,
        status: Any,
        check_in_time: TimeInput = None,
        check_out_time: TimeInput = None,
    ) -> AttendanceRecord:
        """Record attendance for a day; a second mark for the same day replaces the first."""
        subject_id = require_non_empty(str(subject_id or ""), "subject_id")
        day = _require_date(work_date, "work_date")
        status = require_choice(status, AttendanceStatus, "status")

        if status == AttendanceStatus.ABSENT:
            check_in = check_out = None
        else:
            check_in = _as_time(check_in_time, "check_in_time")
            check_out = _as_time(check_out_time, "check_out_time")
            if check_in and check_out and check_out < check_in:
                raise ValidationError("Check-out cannot be earlier than check-in", field="check_out_time")

        rec = self._attendance.upsert(
            subject_id=subject_id,
            work_date=day,
            status=status,
            check_in_time=check_in,
            check_out_time=check_out,
        )
        logger.info("Attendance %s marked %s for %s", day.isoformat(), status.value, subject_id)
        return rec

    def mark_bulk(
        self,
        *,
        work_date: Any,
        statuses: Mapping[str, Any],
        check_in_time: TimeInput = None,
    ) -> AttendanceSummary:
        """Admin marking for many subjects at once.

        All entries are validated before anything is written.
        """
        day = _require_date(work_date, "work_date")
        check_in = _as_time(check_in_time, "check_in_time")
        if not statuses:
            raise ValidationError("Select at least one employee", field="statuses")

        parsed = {
            require_non_empty(str(subject_id or ""), "subject_id"): require_choice(status, AttendanceStatus, "status")
            for subject_id, status in statuses.items()
        }
        records = [
            self.mark(subject_id=subject_id, work_date=day, status=status, check_in_time=check_in)
            for subject_id, status in parsed.items()
        ]
        return _summarize(records)

    def get_for_date(self, subject_id: str, day: Any) -> Optional[AttendanceRecord]:
        return self._attendance.get_for_subject_and_date(str(subject_id), _require_date(day, "date"))

    def list_for_range(self, subject_id: str, start_date: Any, end_date: Any) -> list[AttendanceRecord]:
        start = _require_date(start_date, "start_date")
        end = _require_date(end_date, "end_date")
        if end < start:
            raise ValidationError("End date must be on or after start date", field="end_date")
        rows = self._attendance.list_range(start_date=start, end_date=end, subject_id=str(subject_id))
        return sorted(rows, key=lambda r: r.work_date)

    def summary(self, subject_id: str, month: Any) -> AttendanceSummary:
        first, last = month_bounds(month)
        return _summarize(self._attendance.list_range(start_date=first, end_date=last, subject_id=str(subject_id)))

    def daily_summary(self, day: Any) -> AttendanceSummary:
        d = _require_date(day, "date")
        return _summarize(self._attendance.list_range(start_date=d, end_date=d))

    def history(self, start_date: Any, end_date: Any) -> list[dict]:
        """Per-day counts over a range, one row per calendar day."""
        start = _require_date(start_date, "start_date")
        end = _require_date(end_date, "end_date")
        if end < start:
            raise ValidationError("End date must be on or after start date", field="end_date")

        by_day: dict[date, list[AttendanceRecord]] = {}
        for r in self._attendance.list_range(start_date=start, end_date=end):
            by_day.setdefault(r.work_date, []).append(r)

        out = []
        d = start
        while d <= end:
            out.append({"date": d.isoformat(), **_summarize(by_day.get(d, [])).as_dict()})
            d += timedelta(days=1)
        return out

    def export_frame(self, start_date: Any, end_date: Any) -> pd.DataFrame:
        start = _require_date(start_date, "start_date")
        end = _require_date(end_date, "end_date")
        if end < start:
            raise ValidationError("End date must be on or after start date", field="end_date")

        data = []
        for r in self._attendance.list_range(start_date=start, end_date=end):
            row = self.to_dict(r)
            data.append(
                {
                    "work_date": row["work_date"],
                    "subject_id": row["subject_id"],
                    "status": row["status"],
                    "check_in": row["check_in_time"] or "-",
                    "check_out": row["check_out_time"] or "-",
                }
            )
        return pd.DataFrame(data, columns=EXPORT_COLUMNS)

    def export_csv(self, start_date: Any, end_date: Any) -> str:
        return self.export_frame(start_date, end_date).to_csv(index=False)

    def export_excel(self, start_date: Any, end_date: Any) -> bytes:
        """Same rows as the CSV export, as an .xlsx workbook kept in memory."""
        output = io.BytesIO()
        with pd.ExcelWriter(output, engine="openpyxl") as writer:
            self.export_frame(start_date, end_date).to_excel(writer, index=False, sheet_name="Attendance")
        return output.getvalue()

    @staticmethod
    def to_dict(r: AttendanceRecord) -> dict:
        return {
            "id": r.attendance_id,
            "subject_id": r.subject_id,
            "work_date": r.work_date.isoformat(),
            "status": r.status.value,
            "check_in_time": r.check_in_time.strftime("%H:%M") if r.check_in_time else None,
            "check_out_time": r.check_out_time.strftime("%H:%M") if r.check_out_time else None,
        }
