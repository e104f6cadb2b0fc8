from __future__ import annotations

from typing import Callable, Optional, Sequence

from ..api.client import ApiClient, record_id
from ..common.datetime_utils import is_range, to_date
from ..common.validators import require_choice
from ..core.enums import HolidayType, Role
from ..core.exceptions import ExternalServiceError, ValidationError
from .model import Holiday, HolidayFields
from .repository import HolidayRepository


class ApiHolidayRepository(HolidayRepository):
    """Holidays stored by the REST backend.

    Employees may not read the admin listing, so reads made for a non-admin
    session go to the employee endpoint. ``role_provider`` reports the caller's
    role per call; without one every read is an admin read.
    """

    def __init__(self, client: ApiClient, *, role_provider: Optional[Callable[[], Optional[Role]]] = None):
        self._client = client
        self._role_provider = role_provider

    def _list_path(self) -> str:
        role = self._role_provider() if self._role_provider else None
        if role is None or role == Role.ADMIN:
            return "/admin/holidays"
        return "/user/holidays"

    def list_all(self) -> Sequence[Holiday]:
        body = self._client.get(self._list_path())
        return [_to_holiday(raw) for raw in (body.get("data") or [])]

    def get(self, holiday_id: str) -> Optional[Holiday]:
        for h in self.list_all():
            if h.holiday_id == str(holiday_id):
                return h
        return None

    def create(self, fields: HolidayFields) -> Holiday:
        payload = _to_payload(fields)
        body = self._client.post("/admin/holiday", json=payload)
        return _to_holiday({**payload, **(body.get("data") or {})})

    def update(self, holiday_id: str, fields: HolidayFields) -> Optional[Holiday]:
        payload = _to_payload(fields)
        try:
            body = self._client.put(f"/admin/holiday/{holiday_id}", json=payload)
        except ExternalServiceError as e:
            if e.status_code == 404:
                return None
            raise
        return _to_holiday({"_id": str(holiday_id), **payload, **(body.get("data") or {})})

    def delete(self, holiday_id: str) -> bool:
        try:
            self._client.delete(f"/admin/holiday/{holiday_id}")
        except ExternalServiceError as e:
            if e.status_code == 404:
                return False
            raise
        return True


def _to_payload(f: HolidayFields) -> dict:
    return {
        "name": f.name,
        "startDate": f.start_date.isoformat(),
        "endDate": f.end_date.isoformat() if f.end_date else "",
        "isDateRange": f.is_range,
        "type": f.holiday_type.value,
    }


def _to_holiday(raw: dict) -> Holiday:
    start = to_date(raw.get("startDate"))
    if start is None:
        raise ExternalServiceError("Malformed holiday from HR service")
    end = to_date(raw.get("endDate"))

    ranged = raw.get("isDateRange")
    if ranged is None:
        # Older records carry no flag; infer it from the dates.
        ranged = is_range(start, end)

    try:
        holiday_type = require_choice(raw.get("type") or HolidayType.OTHER.value, HolidayType, "type")
    except ValidationError as e:
        raise ExternalServiceError(f"Malformed holiday from HR service: {e}") from e

    return Holiday(
        holiday_id=record_id(raw),
        name=str(raw.get("name") or ""),
        holiday_type=holiday_type,
        start_date=start,
        end_date=end if ranged else None,
        is_range=bool(ranged),
    )
