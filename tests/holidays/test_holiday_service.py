from __future__ import annotations

from datetime import date, timedelta

import pytest

from hr_portal.core.enums import HolidayType, SortOrder
from hr_portal.core.exceptions import NotFoundError, ValidationError
from hr_portal.holidays.memory_holiday_repository import InMemoryHolidayRepository
from hr_portal.holidays.service import HolidayService


def _svc() -> HolidayService:
    return HolidayService(InMemoryHolidayRepository())


def test_new_years_day_is_upcoming_on_the_day_itself():
    svc = _svc()
    h = svc.add(name="New Year's Day", start_date="2024-01-01", holiday_type="National")
    today = date(2024, 1, 1)

    assert [x.holiday_id for x in svc.list_upcoming(today)] == [h.holiday_id]
    assert svc.list_past(today) == []
    assert svc.days_until(h, today) == 0


def test_single_day_holiday_active_only_on_its_date():
    svc = _svc()
    h = svc.add(name="Labour Day", start_date="2024-05-01")

    assert h in svc.active_on(h.start_date)
    assert h not in svc.active_on(h.start_date - timedelta(days=1))
    assert h not in svc.active_on(h.start_date + timedelta(days=1))


def test_ranged_holiday_active_inclusive():
    svc = _svc()
    h = svc.add(
        name="Year-end shutdown",
        start_date="2025-12-24",
        end_date="2026-01-01",
        is_range=True,
        holiday_type=HolidayType.CORPORATE,
    )

    assert h in svc.active_on("2025-12-31")
    assert h in svc.active_on("2026-01-01")
    assert h not in svc.active_on("2026-01-02")


def test_single_day_holiday_ignores_end_date():
    svc = _svc()
    h = svc.add(name="Founders Day", start_date="2024-03-01", end_date="2024-03-05", is_range=False)
    assert h.end_date is None
    assert h.last_day == date(2024, 3, 1)


@pytest.mark.parametrize(
    "kwargs, field",
    [
        ({"name": "NY", "start_date": "2024-01-01"}, "name"),
        ({"name": "x" * 51, "start_date": "2024-01-01"}, "name"),
        ({"name": "Day off", "start_date": "2024-01-01", "holiday_type": "Bank"}, "holiday_type"),
        ({"name": "Day off", "start_date": "someday"}, "start_date"),
        ({"name": "Day off", "start_date": "2024-01-05", "end_date": "2024-01-01", "is_range": True}, "end_date"),
        ({"name": "Day off", "start_date": "2024-01-05", "is_range": True}, "end_date"),
    ],
)
def test_add_validation(kwargs, field):
    repo = InMemoryHolidayRepository()
    with pytest.raises(ValidationError) as exc:
        HolidayService(repo).add(**kwargs)
    assert exc.value.field == field
    assert repo.list_all() == []


def test_upcoming_and_past_partition_every_holiday():
    svc = _svc()
    for i, start in enumerate(["2023-12-25", "2024-01-01", "2024-02-10", "2023-11-01"]):
        svc.add(name=f"Holiday {i}", start_date=start)
    today = date(2024, 1, 1)

    upcoming = {h.holiday_id for h in svc.list_upcoming(today)}
    past = {h.holiday_id for h in svc.list_past(today)}
    assert upcoming.isdisjoint(past)
    assert upcoming | past == {h.holiday_id for h in svc.list_all()}
    assert len(upcoming) == 2


def test_order_is_chosen_by_caller():
    svc = _svc()
    svc.add(name="Spring", start_date="2024-03-20")
    svc.add(name="Winter", start_date="2024-12-21")
    svc.add(name="Summer", start_date="2024-06-21")
    today = date(2024, 1, 1)

    assert [h.name for h in svc.list_upcoming(today)] == ["Spring", "Summer", "Winter"]
    assert [h.name for h in svc.list_upcoming(today, order=SortOrder.DESC)] == ["Winter", "Summer", "Spring"]
    assert svc.next_upcoming(today).name == "Spring"


def test_update_merges_and_revalidates():
    svc = _svc()
    h = svc.add(name="Retreat", start_date="2024-07-01")

    updated = svc.update(h.holiday_id, end_date="2024-07-03", is_range=True)
    assert updated.name == "Retreat"
    assert updated.last_day == date(2024, 7, 3)

    with pytest.raises(ValidationError):
        svc.update(h.holiday_id, start_date="2024-07-10")
    assert svc.get(h.holiday_id).start_date == date(2024, 7, 1)


def test_update_and_remove_unknown_holiday():
    svc = _svc()
    with pytest.raises(NotFoundError):
        svc.update("missing", name="Anything")
    with pytest.raises(NotFoundError):
        svc.remove("missing")


def test_update_rejects_unknown_fields():
    svc = _svc()
    h = svc.add(name="Retreat", start_date="2024-07-01")
    with pytest.raises(ValidationError):
        svc.update(h.holiday_id, colour="red")


def test_remove():
    svc = _svc()
    h = svc.add(name="Retreat", start_date="2024-07-01")
    svc.remove(h.holiday_id)
    assert svc.list_all() == []


def test_non_text_name_is_a_validation_error():
    svc = _svc()
    with pytest.raises(ValidationError) as exc:
        svc.add(name=12345, start_date="2024-07-01")
    assert exc.value.field == "name"


def test_update_unknown_holiday_is_not_found_even_with_unknown_fields():
    svc = _svc()
    with pytest.raises(NotFoundError):
        svc.update("missing", colour="red")
