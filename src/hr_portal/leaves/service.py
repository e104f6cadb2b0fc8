from __future__ import annotations

import logging
from datetime import date, datetime, timedelta
from typing import Any, Optional

from ..common.datetime_utils import to_date
from ..common.validators import require_choice, require_length
from ..core.constants import REASON_MAX_LENGTH, REASON_MIN_LENGTH
from ..core.enums import LeaveStatus, LeaveType
from ..core.exceptions import InvalidTransitionError, NotFoundError, ValidationError
from .model import DocumentUpload, LeavePolicy, LeaveRequest, NewLeaveRequest
from .repository import LeaveRepository

logger = logging.getLogger(__name__)

_OUTCOMES = {LeaveStatus.APPROVED, LeaveStatus.REJECTED}


class LeaveService:
    """Leave request lifecycle: Pending -> Approved | Rejected (both terminal)."""

    def __init__(self, leaves: LeaveRepository, *, policy: Optional[LeavePolicy] = None):
        self._leaves = leaves
        self._policy = policy or LeavePolicy()

    def submit(
        self,
        *,
        requester_id: str,
        leave_type: Any,
        start_date: Any,
        end_date: Any,
        reason: str,
        today: date,
        now: Optional[datetime] = None,
        document: Optional[DocumentUpload] = None,
    ) -> LeaveRequest:
        leave_type = require_choice(leave_type, LeaveType, "leave_type")

        start = to_date(start_date)
        if start is None:
            raise ValidationError("Invalid start date", field="start_date")
        lead_days = self._policy.lead_days
        if lead_days is not None and start < today + timedelta(days=lead_days):
            if lead_days == 0:
                raise ValidationError("Start date cannot be in the past", field="start_date")
            raise ValidationError(
                f"Leave must be requested at least {lead_days} days in advance", field="start_date"
            )

        end = to_date(end_date)
        if end is None:
            raise ValidationError("Invalid end date", field="end_date")
        if end < start:
            raise ValidationError("End date must be on or after start date", field="end_date")

        reason = require_length(reason, "reason", REASON_MIN_LENGTH, REASON_MAX_LENGTH)

        req = self._leaves.add(
            NewLeaveRequest(
                requester_id=str(requester_id),
                leave_type=leave_type,
                start_date=start,
                end_date=end,
                reason=reason,
                created_at=now or datetime.combine(today, datetime.min.time()),
                document=document,
            )
        )
        logger.info("Leave request %s submitted by %s (%s)", req.request_id, requester_id, leave_type.value)
        return req

    def decide(
        self,
        *,
        request_id: str,
        outcome: Any,
        now: datetime,
        decided_by: Optional[str] = None,
    ) -> LeaveRequest:
        status = require_choice(outcome, LeaveStatus, "status")
        if status not in _OUTCOMES:
            raise ValidationError("Decision must be Approved or Rejected", field="status")

        req = self._leaves.get(str(request_id))
        if not req:
            raise NotFoundError("Leave request not found")
        if req.status != LeaveStatus.PENDING:
            raise InvalidTransitionError(f"Leave request is already {req.status.value}")

        updated = self._leaves.update_status(
            request_id=req.request_id,
            expected=LeaveStatus.PENDING,
            status=status,
            decided_at=now,
            decided_by=decided_by,
        )
        if not updated:
            # Another decision landed between the read and the write.
            raise InvalidTransitionError("Leave request was already decided")

        logger.info("Leave request %s %s by %s", req.request_id, status.value.lower(), decided_by or "-")
        return updated

    def approve(self, *, request_id: str, now: datetime, decided_by: Optional[str] = None) -> LeaveRequest:
        return self.decide(request_id=request_id, outcome=LeaveStatus.APPROVED, now=now, decided_by=decided_by)

    def reject(self, *, request_id: str, now: datetime, decided_by: Optional[str] = None) -> LeaveRequest:
        return self.decide(request_id=request_id, outcome=LeaveStatus.REJECTED, now=now, decided_by=decided_by)

    def get(self, request_id: str) -> LeaveRequest:
        req = self._leaves.get(str(request_id))
        if not req:
            raise NotFoundError("Leave request not found")
        return req

    def list_pending(self) -> list[LeaveRequest]:
        return [r for r in self._leaves.list_all() if r.status == LeaveStatus.PENDING]

    def list_history(self) -> list[LeaveRequest]:
        decided = [r for r in self._leaves.list_all() if r.status != LeaveStatus.PENDING]
        # Undated decisions (legacy rows) sort last.
        decided.sort(key=lambda r: r.decided_at or datetime.min, reverse=True)
        return decided

    def list_for_requester(self, requester_id: str) -> list[LeaveRequest]:
        mine = [r for r in self._leaves.list_all() if r.requester_id == str(requester_id)]
        mine.sort(key=lambda r: r.created_at, reverse=True)
        return mine

    def count_pending(self) -> int:
        return self._count(LeaveStatus.PENDING)

    def count_approved(self) -> int:
        return self._count(LeaveStatus.APPROVED)

    def count_rejected(self) -> int:
        return self._count(LeaveStatus.REJECTED)

    def status_counts(self) -> dict[str, int]:
        counts = {s.value.lower(): 0 for s in LeaveStatus}
        for r in self._leaves.list_all():
            counts[r.status.value.lower()] += 1
        return counts

    def _count(self, status: LeaveStatus) -> int:
        return sum(1 for r in self._leaves.list_all() if r.status == status)

    @staticmethod
    def to_dict(r: LeaveRequest) -> dict:
        return {
            "id": r.request_id,
            "requester_id": r.requester_id,
            "leave_type": r.leave_type.value,
            "start_date": r.start_date.isoformat(),
            "end_date": r.end_date.isoformat(),
            "days": r.duration_days,
            "reason": r.reason,
            "document": r.document,
            "status": r.status.value,
            "created_at": r.created_at.isoformat(),
            "decided_at": r.decided_at.isoformat() if r.decided_at else None,
            "decided_by": r.decided_by,
        }
