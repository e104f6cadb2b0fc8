from __future__ import annotations

import logging
from datetime import date
from typing import Any, Iterable, Optional

from ..common.datetime_utils import classify, days_until, overlaps, to_date
from ..common.validators import require_choice, require_length
from ..core.constants import HOLIDAY_NAME_MAX_LENGTH, HOLIDAY_NAME_MIN_LENGTH
from ..core.enums import Classification, HolidayType, SortOrder
from ..core.exceptions import NotFoundError, ValidationError
from .model import Holiday, HolidayFields
from .repository import HolidayRepository

logger = logging.getLogger(__name__)

_UPDATABLE = {"name", "holiday_type", "start_date", "end_date", "is_range"}


class HolidayService:
    def __init__(self, holidays: HolidayRepository):
        self._holidays = holidays

    @staticmethod
    def _validate(
        *,
        name: Optional[str],
        holiday_type: Any,
        start_date: Any,
        end_date: Any,
        is_range: bool,
    ) -> HolidayFields:
        name = require_length(name, "name", HOLIDAY_NAME_MIN_LENGTH, HOLIDAY_NAME_MAX_LENGTH)
        holiday_type = require_choice(holiday_type, HolidayType, "holiday_type")

        start = to_date(start_date)
        if start is None:
            raise ValidationError("Invalid start date", field="start_date")

        end = None
        if is_range:
            end = to_date(end_date)
            if end is None or end < start:
                raise ValidationError("Invalid or earlier end date", field="end_date")

        return HolidayFields(
            name=name,
            holiday_type=holiday_type,
            start_date=start,
            end_date=end,
            is_range=bool(is_range),
        )

    def add(
        self,
        *,
        name: str,
        start_date: Any,
        end_date: Any = None,
        is_range: bool = False,
        holiday_type: Any = HolidayType.OTHER,
    ) -> Holiday:
        fields = self._validate(
            name=name,
            holiday_type=holiday_type,
            start_date=start_date,
            end_date=end_date,
            is_range=is_range,
        )
        h = self._holidays.create(fields)
        logger.info("Holiday %s added (%s)", h.holiday_id, h.name)
        return h

    def update(self, holiday_id: str, **changes: Any) -> Holiday:
        current = self.get(holiday_id)

        unknown = set(changes) - _UPDATABLE
        if unknown:
            raise ValidationError(f"Unknown holiday fields: {', '.join(sorted(unknown))}")

        merged = {
            "name": current.name,
            "holiday_type": current.holiday_type,
            "start_date": current.start_date,
            "end_date": current.end_date,
            "is_range": current.is_range,
            **changes,
        }
        fields = self._validate(**merged)

        h = self._holidays.update(current.holiday_id, fields)
        if not h:
            raise NotFoundError("Holiday not found")
        logger.info("Holiday %s updated", h.holiday_id)
        return h

    def remove(self, holiday_id: str) -> None:
        if not self._holidays.delete(str(holiday_id)):
            raise NotFoundError("Holiday not found")
        logger.info("Holiday %s removed", holiday_id)

    def get(self, holiday_id: str) -> Holiday:
        h = self._holidays.get(str(holiday_id))
        if not h:
            raise NotFoundError("Holiday not found")
        return h

    def list_all(self, *, order: SortOrder = SortOrder.ASC) -> list[Holiday]:
        return _sorted(self._holidays.list_all(), order)

    def list_upcoming(self, today: date, *, order: SortOrder = SortOrder.ASC) -> list[Holiday]:
        return self._classified(today, Classification.UPCOMING, order)

    def list_past(self, today: date, *, order: SortOrder = SortOrder.ASC) -> list[Holiday]:
        return self._classified(today, Classification.PAST, order)

    def active_on(self, day: Any) -> list[Holiday]:
        d = to_date(day)
        if d is None:
            raise ValidationError("Invalid date", field="date")
        return _sorted(
            (h for h in self._holidays.list_all() if overlaps(h.start_date, h.last_day, d, d)),
            SortOrder.ASC,
        )

    def next_upcoming(self, today: date) -> Optional[Holiday]:
        upcoming = self.list_upcoming(today)
        return upcoming[0] if upcoming else None

    @staticmethod
    def days_until(holiday: Holiday, today: date) -> Optional[int]:
        return days_until(holiday.start_date, today)

    def _classified(self, today: date, which: Classification, order: SortOrder) -> list[Holiday]:
        return _sorted((h for h in self._holidays.list_all() if classify(h, today) == which), order)

    @staticmethod
    def to_dict(h: Holiday, *, today: Optional[date] = None) -> dict:
        out = {
            "id": h.holiday_id,
            "name": h.name,
            "type": h.holiday_type.value,
            "start_date": h.start_date.isoformat(),
            "end_date": h.end_date.isoformat() if h.end_date else None,
            "is_range": h.is_range,
        }
        if today is not None:
            cls = classify(h, today)
            out["classification"] = cls.value if cls else None
            out["days_until"] = days_until(h.start_date, today)
        return out


def _sorted(items: Iterable[Holiday], order: SortOrder) -> list[Holiday]:
    return sorted(items, key=lambda h: (h.start_date, h.name), reverse=SortOrder(order) == SortOrder.DESC)
