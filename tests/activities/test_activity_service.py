from __future__ import annotations

from datetime import date, time

import pytest

from src.workforce_hub.workforce_hub.core.enums import CheckInMethod, Collection
from src.workforce_hub.workforce_hub.core.exceptions import DuplicateAttendanceError, NotFoundError, ValidationError


def test_check_in_by_code_is_trimmed_and_case_insensitive(container):
    result = container.activity_service.check_in(1, employee_code="  emp001 ")
    assert result.employee.employee_id == 1
    assert result.method == CheckInMethod.QR
    assert container.activity_service.has_attended(1, 1)


def test_second_check_in_names_the_employee(container):
    svc = container.activity_service
    svc.check_in(1, employee_code="EMP002")

    with pytest.raises(DuplicateAttendanceError) as exc:
        svc.check_in(1, employee_id=2, method=CheckInMethod.MANUAL)

    assert "Malee Chaiyo" in str(exc.value)
    assert len(svc.attendees(1)) == 1


def test_same_employee_can_join_another_activity(container):
    svc = container.activity_service
    svc.check_in(1, employee_code="EMP001")
    svc.check_in(2, employee_code="EMP001")
    assert svc.attendance_counts(today=date(2024, 6, 1)) == {"today": 2, "total": 2}


def test_unknown_code_or_activity(container):
    svc = container.activity_service
    with pytest.raises(NotFoundError):
        svc.check_in(1, employee_code="NOPE")
    with pytest.raises(NotFoundError):
        svc.check_in(99, employee_code="EMP001")
    with pytest.raises(ValidationError):
        svc.check_in(1)


def test_create_validates_fields(container):
    svc = container.activity_service
    with pytest.raises(ValidationError):
        svc.create_activity({"name": " ", "activity_date": "2024-06-10"})
    with pytest.raises(ValidationError):
        svc.create_activity({"name": "Training", "activity_date": "10/06/2024"})
    with pytest.raises(ValidationError):
        svc.create_activity(
            {"name": "Training", "activity_date": "2024-06-10", "start_time": "10:00", "end_time": "09:00"}
        )


def test_create_update_delete(container):
    svc = container.activity_service
    seen = []
    container.feed.subscribe(Collection.ACTIVITIES, seen.append)

    activity_id = svc.create_activity(
        {"name": "Training", "activity_date": "2024-06-10", "start_time": "09:00", "end_time": "11:30"}
    )
    created = svc.get_activity(activity_id)
    assert created.start_time == time(9, 0)
    assert created.activity_date == date(2024, 6, 10)

    svc.update_activity(activity_id, {"name": "Fire Drill", "activity_date": "2024-06-11", "location": "Yard"})
    assert svc.get_activity(activity_id).name == "Fire Drill"

    svc.delete_activity(activity_id)
    with pytest.raises(NotFoundError):
        svc.get_activity(activity_id)
    assert len(seen) == 3


def test_upcoming_uses_the_configured_window(container, fixed_now):
    svc = container.activity_service
    svc.create_activity({"name": "Far away", "activity_date": "2024-06-09"})
    svc.create_activity({"name": "Last day", "activity_date": "2024-06-08"})

    items = svc.upcoming(now=fixed_now)

    assert [i["activity"].name for i in items] == ["Safety Day", "Last day"]
    assert items[0]["when"] == "in 2 days"
    assert [i["activity"].name for i in svc.upcoming(now=fixed_now, days=8)][-1] == "Far away"


def test_open_for_check_in_hides_past_activities(container, fixed_now):
    names = [a.name for a in container.activity_service.open_for_check_in(now=fixed_now)]
    assert names == ["Safety Day"]
