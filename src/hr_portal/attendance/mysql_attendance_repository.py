from __future__ import annotations

from datetime import date, time
from typing import Any, Optional, Sequence

from ..core.enums import AttendanceStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, normalize_mysql_time
from .model import AttendanceRecord
from .repository import AttendanceRepository

_COLUMNS = "attendance_id, subject_id, work_date, status, check_in_time, check_out_time"


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def upsert(
        self,
        *,
        subject_id: str,
        work_date: date,
        status: AttendanceStatus,
        check_in_time: Optional[time],
        check_out_time: Optional[time],
    ) -> AttendanceRecord:
        with db_cursor(self._conn_factory) as (_, cur):
            # UNIQUE(subject_id, work_date) turns a second mark into an update of the same row.
            cur.execute(
                """
                INSERT INTO attendance_records(subject_id, work_date, status, check_in_time, check_out_time)
                VALUES(%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    status=VALUES(status),
                    check_in_time=VALUES(check_in_time),
                    check_out_time=VALUES(check_out_time)
                """,
                (str(subject_id), work_date, status.value, check_in_time, check_out_time),
            )
            cur.execute(
                f"SELECT {_COLUMNS} FROM attendance_records WHERE subject_id=%s AND work_date=%s",
                (str(subject_id), work_date),
            )
            return _to_record(fetchone(cur))

    def get_for_subject_and_date(self, subject_id: str, work_date: date) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM attendance_records WHERE subject_id=%s AND work_date=%s",
                (str(subject_id), work_date),
            )
            r = fetchone(cur)
            return _to_record(r) if r else None

    def list_range(
        self,
        *,
        start_date: date,
        end_date: date,
        subject_id: Optional[str] = None,
    ) -> Sequence[AttendanceRecord]:
        clauses = ["work_date BETWEEN %s AND %s"]
        params: list[object] = [start_date, end_date]
        if subject_id is not None:
            clauses.append("subject_id=%s")
            params.append(str(subject_id))

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                WHERE {where}
                ORDER BY work_date ASC, subject_id ASC
                """,
                tuple(params),
            )
            return [_to_record(r) for r in fetchall(cur)]


def _to_record(r: dict[str, Any]) -> AttendanceRecord:
    return AttendanceRecord(
        attendance_id=str(r["attendance_id"]),
        subject_id=str(r["subject_id"]),
        work_date=r["work_date"],
        status=AttendanceStatus(r["status"]),
        check_in_time=normalize_mysql_time(r.get("check_in_time")),
        check_out_time=normalize_mysql_time(r.get("check_out_time")),
    )
