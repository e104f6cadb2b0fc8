from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import BinaryIO, Optional

from ..core.enums import LeaveStatus, LeaveType


@dataclass(frozen=True)
class LeaveRequest:
    request_id: str
    requester_id: str
    leave_type: LeaveType
    start_date: date
    end_date: date
    reason: str
    status: LeaveStatus
    created_at: datetime
    document: Optional[str] = None
    decided_at: Optional[datetime] = None
    decided_by: Optional[str] = None

    @property
    def is_pending(self) -> bool:
        return self.status == LeaveStatus.PENDING

    @property
    def duration_days(self) -> int:
        return (self.end_date - self.start_date).days + 1


@dataclass(frozen=True)
class DocumentUpload:
    """Supporting document attached to a leave submission (multipart upload)."""

    filename: str
    stream: BinaryIO
    content_type: Optional[str] = None


@dataclass(frozen=True)
class NewLeaveRequest:
    """Validated submission handed to the repository."""

    requester_id: str
    leave_type: LeaveType
    start_date: date
    end_date: date
    reason: str
    created_at: datetime
    document: Optional[DocumentUpload] = None


@dataclass(frozen=True)
class LeavePolicy:
    """Minimum lead time between today and the first day of leave.

    ``lead_days=None`` disables the check, 0 allows same-day requests.
    """

    lead_days: Optional[int] = 0
