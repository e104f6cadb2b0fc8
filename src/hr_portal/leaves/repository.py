from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import LeaveStatus
from .model import LeaveRequest, NewLeaveRequest


class LeaveRepository(Protocol):
    def add(self, new: NewLeaveRequest) -> LeaveRequest:
        raise NotImplementedError

    def get(self, request_id: str) -> Optional[LeaveRequest]:
        raise NotImplementedError

    def list_all(self) -> Sequence[LeaveRequest]:
        """All requests in insertion order."""

        raise NotImplementedError

    def update_status(
        self,
        *,
        request_id: str,
        expected: LeaveStatus,
        status: LeaveStatus,
        decided_at: datetime,
        decided_by: Optional[str] = None,
    ) -> Optional[LeaveRequest]:
        """Compare-and-set: only writes when the stored status equals ``expected``.

        Returns the updated request, or None when the precondition failed.
        """

        raise NotImplementedError
