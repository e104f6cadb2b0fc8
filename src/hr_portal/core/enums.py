from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User role used for route authorization."""

    ADMIN = "admin"
    USER = "user"


class LeaveType(str, Enum):
    ANNUAL = "Annual"
    SICK = "Sick"
    MATERNITY = "Maternity"
    PATERNITY = "Paternity"
    UNPAID = "Unpaid"
    OTHER = "Other"


class LeaveStatus(str, Enum):
    """Approval workflow state of a leave request."""

    PENDING = "Pending"
    APPROVED = "Approved"
    REJECTED = "Rejected"


class HolidayType(str, Enum):
    NATIONAL = "National"
    RELIGIOUS = "Religious"
    REGIONAL = "Regional"
    CORPORATE = "Corporate"
    OTHER = "Other"


class AttendanceStatus(str, Enum):
    PRESENT = "Present"
    ABSENT = "Absent"
    LATE = "Late"


class Classification(str, Enum):
    UPCOMING = "upcoming"
    PAST = "past"


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"
