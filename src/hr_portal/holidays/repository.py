from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Holiday, HolidayFields


class HolidayRepository(Protocol):
    def list_all(self) -> Sequence[Holiday]:
        raise NotImplementedError

    def get(self, holiday_id: str) -> Optional[Holiday]:
        raise NotImplementedError

    def create(self, fields: HolidayFields) -> Holiday:
        raise NotImplementedError

    def update(self, holiday_id: str, fields: HolidayFields) -> Optional[Holiday]:
        """Returns None when the holiday does not exist."""

        raise NotImplementedError

    def delete(self, holiday_id: str) -> bool:
        raise NotImplementedError
