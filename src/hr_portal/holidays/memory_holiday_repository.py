from __future__ import annotations

from typing import Optional, Sequence
from uuid import uuid4

from .model import Holiday, HolidayFields
from .repository import HolidayRepository


class InMemoryHolidayRepository(HolidayRepository):
    def __init__(self):
        self._items: dict[str, Holiday] = {}

    def list_all(self) -> Sequence[Holiday]:
        return list(self._items.values())

    def get(self, holiday_id: str) -> Optional[Holiday]:
        return self._items.get(str(holiday_id))

    def create(self, fields: HolidayFields) -> Holiday:
        h = _build(uuid4().hex, fields)
        self._items[h.holiday_id] = h
        return h

    def update(self, holiday_id: str, fields: HolidayFields) -> Optional[Holiday]:
        if str(holiday_id) not in self._items:
            return None
        h = _build(str(holiday_id), fields)
        self._items[h.holiday_id] = h
        return h

    def delete(self, holiday_id: str) -> bool:
        return self._items.pop(str(holiday_id), None) is not None


def _build(holiday_id: str, f: HolidayFields) -> Holiday:
    return Holiday(
        holiday_id=holiday_id,
        name=f.name,
        holiday_type=f.holiday_type,
        start_date=f.start_date,
        end_date=f.end_date,
        is_range=f.is_range,
    )
