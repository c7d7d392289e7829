import pytest

from app_lib.exceptions import ValidationException
from app_lib.scheduling.validation import EventForm, validate_event_form
from config.constants import ERROR_MESSAGES
from models.models import ConflictCandidate


def make_form(**overrides):
    data = dict(title="Planning", date="2025-06-10", end_date="2025-06-10", start_time="09:00", end_time="10:00")
    data.update(overrides)
    return EventForm(**data)


@pytest.mark.parametrize("overrides, message", [
    ({"title": "  "}, "Title is required."),
    ({"date": ""}, "Date is required."),
    ({"end_date": ""}, "End date is required."),
    ({"end_date": "2025-06-09"}, "End date must be the same as or after start date."),
    ({"end_date": "2025-06-16"}, ERROR_MESSAGES["weekend_range"]),
    ({"start_time": ""}, "Start and end time are required."),
    ({"end_time": "09:00"}, "End time must be after start time."),
    ({"end_time": "08:30"}, "End time must be after start time."),
])
def test_create_rejections(overrides, message):
    with pytest.raises(ValidationException) as error:
        validate_event_form(make_form(**overrides))
    assert error.value.message == message


def test_conflicts_block_submission():
    conflict = ConflictCandidate(id=3, title="Budget review", start_time="09:30:00", end_time="10:30:00")
    with pytest.raises(ValidationException, match="conflicts with existing event"):
        validate_event_form(make_form(), conflicts=[conflict])


def test_valid_create_payload():
    form = make_form(
        location=" Room 4 ",
        description="Agenda",
        is_tentative=True,
        tentative_note="awaiting venue",
        attendee_ids=[9, 12],
    )
    payload = validate_event_form(form)
    assert payload.to_json() == {
        "title": "Planning",
        "type": "meeting",
        "date": "2025-06-10",
        "end_date": "2025-06-10",
        "start_time": "09:00:00",
        "end_time": "10:00:00",
        "location": "Room 4",
        "description": "[TENTATIVE] awaiting venue\nAgenda",
        "attendee_ids": [9, 12],
    }
    assert payload.to_form_fields()["attendee_ids"] == "[9, 12]"


def test_edit_may_keep_an_existing_weekend_date():
    form = make_form(date="2025-06-14", end_date="")
    payload = validate_event_form(form, is_edit=True, original_date="2025-06-14")
    assert payload.end_date is None

    with pytest.raises(ValidationException) as error:
        validate_event_form(form, is_edit=True, original_date="2025-06-13")
    assert error.value.message == ERROR_MESSAGES["weekend_locked"]


def test_conflict_query():
    assert make_form(start_time="").conflict_query() is None
    assert make_form(end_date="2025-06-11").conflict_query() == {
        "date": "2025-06-10",
        "start_time": "09:00:00",
        "end_time": "10:00:00",
        "end_date": "2025-06-11",
    }
    edit_query = make_form().conflict_query(is_edit=True, exclude_event_id=4)
    assert edit_query["exclude_event_id"] == 4
    assert "end_date" not in edit_query
