from __future__ import annotations

import threading
from dataclasses import replace
from datetime import datetime
from typing import Optional, Sequence
from uuid import uuid4

from ..core.enums import LeaveStatus
from .model import LeaveRequest, NewLeaveRequest
from .repository import LeaveRepository


class InMemoryLeaveRepository(LeaveRepository):
    def __init__(self):
        self._items: dict[str, LeaveRequest] = {}
        self._lock = threading.Lock()

    def add(self, new: NewLeaveRequest) -> LeaveRequest:
        req = LeaveRequest(
            request_id=uuid4().hex,
            requester_id=new.requester_id,
            leave_type=new.leave_type,
            start_date=new.start_date,
            end_date=new.end_date,
            reason=new.reason,
            status=LeaveStatus.PENDING,
            created_at=new.created_at,
            document=new.document.filename if new.document else None,
        )
        with self._lock:
            self._items[req.request_id] = req
        return req

    def get(self, request_id: str) -> Optional[LeaveRequest]:
        return self._items.get(str(request_id))

    def list_all(self) -> Sequence[LeaveRequest]:
        with self._lock:
            return list(self._items.values())

    def update_status(
        self,
        *,
        request_id: str,
        expected: LeaveStatus,
        status: LeaveStatus,
        decided_at: datetime,
        decided_by: Optional[str] = None,
    ) -> Optional[LeaveRequest]:
        with self._lock:
            current = self._items.get(str(request_id))
            if not current or current.status != expected:
                return None
            updated = replace(current, status=status, decided_at=decided_at, decided_by=decided_by)
            self._items[current.request_id] = updated
            return updated
