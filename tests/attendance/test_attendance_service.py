from __future__ import annotations

import csv
import io
from datetime import date, time

import pytest

from hr_portal.attendance.memory_attendance_repository import InMemoryAttendanceRepository
from hr_portal.attendance.service import AttendanceService
from hr_portal.core.enums import AttendanceStatus
from hr_portal.core.exceptions import ValidationError


def _svc():
    repo = InMemoryAttendanceRepository()
    return AttendanceService(repo), repo


def test_second_mark_for_same_day_replaces_first():
    svc, repo = _svc()
    first = svc.mark(subject_id="E1", work_date="2024-03-04", status="Present", check_in_time="09:00")
    second = svc.mark(subject_id="E1", work_date="2024-03-04", status="Late", check_in_time="10:15")

    assert second.attendance_id == first.attendance_id
    rows = svc.list_for_range("E1", "2024-03-04", "2024-03-04")
    assert len(rows) == 1
    assert rows[0].status == AttendanceStatus.LATE
    assert rows[0].check_in_time == time(10, 15)


def test_absent_clears_times():
    svc, _ = _svc()
    rec = svc.mark(
        subject_id="E1",
        work_date=date(2024, 3, 4),
        status=AttendanceStatus.ABSENT,
        check_in_time="09:00",
        check_out_time="17:00",
    )
    assert rec.check_in_time is None
    assert rec.check_out_time is None


def test_check_out_before_check_in_is_rejected():
    svc, repo = _svc()
    with pytest.raises(ValidationError) as exc:
        svc.mark(
            subject_id="E1",
            work_date="2024-03-04",
            status="Present",
            check_in_time="17:00",
            check_out_time="09:00",
        )
    assert exc.value.field == "check_out_time"
    assert svc.get_for_date("E1", "2024-03-04") is None


@pytest.mark.parametrize(
    "kwargs, field",
    [
        ({"subject_id": "", "work_date": "2024-03-04", "status": "Present"}, "subject_id"),
        ({"subject_id": "E1", "work_date": "04/03/2024", "status": "Present"}, "work_date"),
        ({"subject_id": "E1", "work_date": "2024-03-04", "status": "Holiday"}, "status"),
        ({"subject_id": "E1", "work_date": "2024-03-04", "status": "Present", "check_in_time": "9am"}, "check_in_time"),
        ({"subject_id": "E1", "work_date": "2024-03-04", "status": "Present", "check_in_time": 900}, "check_in_time"),
        ({"subject_id": 7, "work_date": "2024-03-04", "status": 1}, "status"),
    ],
)
def test_mark_validation(kwargs, field):
    svc, _ = _svc()
    with pytest.raises(ValidationError) as exc:
        svc.mark(**kwargs)
    assert exc.value.field == field


def test_range_must_be_ordered():
    svc, _ = _svc()
    with pytest.raises(ValidationError):
        svc.list_for_range("E1", "2024-03-05", "2024-03-01")


def test_monthly_summary_counts_only_that_month_and_subject():
    svc, _ = _svc()
    svc.mark(subject_id="E1", work_date="2024-02-29", status="Present")
    svc.mark(subject_id="E1", work_date="2024-03-01", status="Present")
    svc.mark(subject_id="E1", work_date="2024-03-02", status="Late")
    svc.mark(subject_id="E1", work_date="2024-03-31", status="Absent")
    svc.mark(subject_id="E2", work_date="2024-03-01", status="Present")

    s = svc.summary("E1", "2024-03")
    assert (s.present_count, s.late_count, s.absent_count) == (1, 1, 1)
    assert s.total == 3


def test_mark_bulk_validates_everything_before_writing():
    svc, repo = _svc()
    with pytest.raises(ValidationError):
        svc.mark_bulk(work_date="2024-03-04", statuses={"E1": "Present", "E2": "Sleeping"})
    assert repo.list_range(start_date=date(2024, 3, 4), end_date=date(2024, 3, 4)) == []

    summary = svc.mark_bulk(
        work_date="2024-03-04",
        statuses={"E1": "Present", "E2": "Absent", "E3": "late"},
        check_in_time="09:00",
    )
    assert summary.as_dict() == {"present": 1, "absent": 1, "late": 1, "total": 3}
    assert svc.daily_summary("2024-03-04") == summary
    assert svc.get_for_date("E2", "2024-03-04").check_in_time is None


def test_mark_bulk_requires_entries():
    svc, _ = _svc()
    with pytest.raises(ValidationError) as exc:
        svc.mark_bulk(work_date="2024-03-04", statuses={})
    assert exc.value.field == "statuses"


def test_history_has_one_row_per_day():
    svc, _ = _svc()
    svc.mark(subject_id="E1", work_date="2024-03-01", status="Present")
    svc.mark(subject_id="E2", work_date="2024-03-03", status="Late")

    rows = svc.history("2024-03-01", "2024-03-03")
    assert [r["date"] for r in rows] == ["2024-03-01", "2024-03-02", "2024-03-03"]
    assert rows[0]["present"] == 1
    assert rows[1]["total"] == 0
    assert rows[2]["late"] == 1


def test_export_csv():
    svc, _ = _svc()
    svc.mark(subject_id="E1", work_date="2024-03-01", status="Present", check_in_time="08:55", check_out_time="17:05")
    svc.mark(subject_id="E2", work_date="2024-03-01", status="Absent")

    rows = list(csv.DictReader(io.StringIO(svc.export_csv("2024-03-01", "2024-03-31"))))
    assert rows == [
        {"work_date": "2024-03-01", "subject_id": "E1", "status": "Present", "check_in": "08:55", "check_out": "17:05"},
        {"work_date": "2024-03-01", "subject_id": "E2", "status": "Absent", "check_in": "-", "check_out": "-"},
    ]
