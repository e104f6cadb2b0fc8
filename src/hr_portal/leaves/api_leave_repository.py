from __future__ import annotations

from dataclasses import replace
from datetime import datetime
from typing import Optional, Sequence

from ..api.client import ApiClient, record_id
from ..common.datetime_utils import to_date, to_datetime
from ..common.validators import require_choice
from ..core.enums import LeaveStatus, LeaveType
from ..core.exceptions import ExternalServiceError, ValidationError
from .model import LeaveRequest, NewLeaveRequest
from .repository import LeaveRepository


class ApiLeaveRepository(LeaveRepository):
    """Leave requests stored by the REST backend.

    The backend has no single-request endpoint, so lookups filter the full list.
    It also owns row locking on status changes; ``expected`` is enforced there.
    """

    def __init__(self, client: ApiClient):
        self._client = client

    def add(self, new: NewLeaveRequest) -> LeaveRequest:
        form = {
            "leaveType": new.leave_type.value,
            "fromDate": new.start_date.isoformat(),
            "toDate": new.end_date.isoformat(),
            "reason": new.reason,
        }
        files = None
        if new.document:
            files = {"document": (new.document.filename, new.document.stream, new.document.content_type)}

        body = self._client.post("/user/leave-form", data=form, files=files)
        raw = {
            **form,
            "user": new.requester_id,
            "status": LeaveStatus.PENDING.value,
            "createdAt": new.created_at.isoformat(),
            **(body.get("data") or {}),
        }
        return _to_leave(raw)

    def get(self, request_id: str) -> Optional[LeaveRequest]:
        for r in self.list_all():
            if r.request_id == str(request_id):
                return r
        return None

    def list_all(self) -> Sequence[LeaveRequest]:
        body = self._client.get("/user/all-leave-forms", params={"sortBy": "createdAt", "order": "asc"})
        return [_to_leave(raw) for raw in (body.get("data") or [])]

    def update_status(
        self,
        *,
        request_id: str,
        expected: LeaveStatus,
        status: LeaveStatus,
        decided_at: datetime,
        decided_by: Optional[str] = None,
    ) -> Optional[LeaveRequest]:
        try:
            body = self._client.put(f"/user/leave-form/{request_id}/status", json={"status": status.value})
        except ExternalServiceError as e:
            if e.status_code in (400, 404, 409):
                return None
            raise

        raw = body.get("data")
        if not raw:
            return self.get(request_id)
        updated = _to_leave(raw)
        if updated.decided_at is None:
            return replace(updated, decided_at=decided_at, decided_by=decided_by or updated.decided_by)
        return updated


def _requester_of(raw: dict) -> str:
    user = raw.get("user")
    if isinstance(user, dict):
        return str(user.get("_id") or user.get("id") or user.get("email") or "")
    return str(user or raw.get("userId") or "")


def _to_leave(raw: dict) -> LeaveRequest:
    start = to_date(raw.get("fromDate"))
    end = to_date(raw.get("toDate")) or start
    if start is None:
        raise ExternalServiceError("Malformed leave request from HR service")

    try:
        status = require_choice(raw.get("status") or LeaveStatus.PENDING.value, LeaveStatus, "status")
        leave_type = require_choice(raw.get("leaveType") or LeaveType.OTHER.value, LeaveType, "leave_type")
    except ValidationError as e:
        raise ExternalServiceError(f"Malformed leave request from HR service: {e}") from e

    decided_at = to_datetime(raw.get("decidedAt"))
    if decided_at is None and status != LeaveStatus.PENDING:
        decided_at = to_datetime(raw.get("updatedAt"))

    return LeaveRequest(
        request_id=record_id(raw),
        requester_id=_requester_of(raw),
        leave_type=leave_type,
        start_date=start,
        end_date=end,
        reason=str(raw.get("reason") or ""),
        status=status,
        created_at=to_datetime(raw.get("createdAt")) or datetime.min,
        document=raw.get("document") or None,
        decided_at=decided_at,
        decided_by=raw.get("decidedBy"),
    )
