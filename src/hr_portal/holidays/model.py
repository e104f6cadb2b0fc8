from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..core.enums import HolidayType


@dataclass(frozen=True)
class Holiday:
    holiday_id: str
    name: str
    holiday_type: HolidayType
    start_date: date
    end_date: Optional[date] = None
    is_range: bool = False

    @property
    def last_day(self) -> date:
        """Inclusive end of the holiday (start date for single-day holidays)."""
        return self.end_date if self.is_range and self.end_date else self.start_date


@dataclass(frozen=True)
class HolidayFields:
    """Validated holiday attributes, used for both create and update."""

    name: str
    holiday_type: HolidayType
    start_date: date
    end_date: Optional[date]
    is_range: bool
