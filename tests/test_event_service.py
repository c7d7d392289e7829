import json

import pytest

from app_lib.exceptions import NetworkException, NotFoundException, ServerRejectedException, ValidationException
from app_lib.scheduling.validation import EventForm
from config.constants import ERROR_MESSAGES
from models.models import CancelRequest, EventMove, RsvpRequest
from services.event_service import EventService

EVENT = {
    "id": 4,
    "title": "Planning",
    "type": "MEETING",
    "date": "2025-06-10T00:00:00.000Z",
    "start_time": "09:00",
    "end_time": "10:00",
    "created_by": 7,
}


@pytest.fixture
def service(api):
    return EventService(client=api)


def make_form(**overrides):
    data = dict(title="Planning", date="2025-06-10", end_date="2025-06-10", start_time="09:00", end_time="10:00")
    data.update(overrides)
    return EventForm(**data)


def test_list_events_accepts_wrapped_rows(service, api):
    api.get.return_value = {"events": [EVENT]}
    events = service.list_events(start="2025-06-01", end="2025-06-30", q="  plan ")
    assert events[0].date == "2025-06-10"
    assert events[0].start_time == "09:00:00"
    assert api.get.call_args.kwargs["params"] == {"start": "2025-06-01", "end": "2025-06-30", "q": "plan"}


def test_list_events_without_filters(service, api):
    api.get.return_value = [EVENT]
    assert len(service.list_events()) == 1
    assert api.get.call_args.kwargs["params"] is None


def test_get_event_maps_404(service, api):
    api.get.side_effect = ServerRejectedException("Not found", status_code=404)
    with pytest.raises(NotFoundException):
        service.get_event(99)


def test_get_event_reraises_other_rejections(service, api):
    api.get.side_effect = ServerRejectedException("Server error", status_code=500)
    with pytest.raises(ServerRejectedException) as error:
        service.get_event(99)
    assert not isinstance(error.value, NotFoundException)


def test_create_is_multipart_with_optional_attachment(service, api):
    api.upload.return_value = {"id": 4}
    form = make_form(attendee_ids=[9])
    service.save_event(form, attachment=("agenda.pdf", b"%PDF", None))

    files = api.upload.call_args.kwargs["files"]
    fields = {name: part for name, part in files}
    assert fields["title"] == (None, "Planning")
    assert json.loads(fields["attendee_ids"][1]) == [9]
    assert fields["attachment"] == ("agenda.pdf", b"%PDF", "application/octet-stream")
    assert api.upload.call_args.args[0].endswith("/events")


def test_edit_sends_json_without_end_date(service, api):
    api.put.return_value = {"id": 4}
    service.save_event(make_form(end_date=""), event_id=4, original_date="2025-06-10")
    url = api.put.call_args.args[0]
    body = api.put.call_args.kwargs["data"]
    assert url.endswith("/events/4")
    assert "end_date" not in body


def test_invalid_forms_never_reach_the_server(service, api):
    with pytest.raises(ValidationException) as error:
        service.save_event(make_form(end_date="2025-06-16"))
    assert error.value.message == ERROR_MESSAGES["weekend_range"]

    with pytest.raises(ValidationException, match="End time must be after start time."):
        service.save_event(make_form(start_time="10:00", end_time="09:00"))
    api.upload.assert_not_called()
    api.put.assert_not_called()


def test_rejected_save_refreshes_conflicts(service, api):
    api.upload.side_effect = ServerRejectedException("Conflict", status_code=409)
    api.post.return_value = {"conflicts": [{"id": 2, "title": "Budget review", "start_time": "09:30", "end_time": "10:30"}]}

    with pytest.raises(ServerRejectedException) as error:
        service.save_event(make_form())

    conflicts = error.value.details["conflicts"]
    assert [c.title for c in conflicts] == ["Budget review"]
    assert api.post.call_args.args[0].endswith("/events/check-conflict")


def test_check_conflict_is_best_effort(service, api):
    assert service.check_conflict(None) == []
    api.post.assert_not_called()

    api.post.side_effect = ServerRejectedException("Bad request", status_code=400)
    assert service.check_conflict({"date": "2025-06-10"}) == []


def test_move_sends_reason(service, api):
    move = EventMove(date="2025-06-11", start_time="09:00:00", end_time="10:00:00", move_reason="venue")
    service.move_event(4, move)
    assert api.put.call_args.kwargs["data"] == {
        "date": "2025-06-11",
        "start_time": "09:00:00",
        "end_time": "10:00:00",
        "move_reason": "venue",
    }


def test_rsvp_and_cancel_reload_the_event(service, api):
    api.get.return_value = EVENT
    event = service.rsvp(4, RsvpRequest(status="declined", decline_reason="Travel"))
    assert event.id == 4
    assert api.post.call_args.args[0].endswith("/events/4/rsvp")

    service.cancel_event(4, CancelRequest(mode="cancel", reason="Typhoon"))
    assert api.post.call_args.args[0].endswith("/events/4/cancel")
    assert api.post.call_args.kwargs["data"] == {"mode": "cancel", "reason": "Typhoon"}


def test_post_document_upload(service, api):
    api.get.return_value = EVENT
    service.upload_post_document(4, ("minutes.docx", b"data", "application/msword"))
    assert api.upload.call_args.kwargs["files"] == [("file", ("minutes.docx", b"data", "application/msword"))]
    assert api.upload.call_args.args[0].endswith("/events/4/post-document")


def test_conflict_lists(service, api):
    api.get.return_value = [{"event_id": 1, "conflicting_event_id": 2, "time_conflict": 1}]
    rows = service.conflicts()
    assert rows[0].time_conflict is True
    assert api.get.call_args.args[0].endswith("/events/conflicts")
    service.conflicts_list()
    assert api.get.call_args.args[0].endswith("/events/conflicts/list")


def test_unreachable_pre_check_reports_no_conflicts(service, api):
    api.post.side_effect = NetworkException("Cannot reach server.")
    assert service.check_conflict({"date": "2025-06-10", "start_time": "09:00:00", "end_time": "10:00:00"}) == []


def test_failed_refresh_keeps_the_save_rejection(service, api):
    api.upload.side_effect = ServerRejectedException("Conflict detected", status_code=409)
    api.post.side_effect = NetworkException("Cannot reach server.")

    with pytest.raises(ServerRejectedException) as error:
        service.save_event(make_form())

    assert error.value.message == "Conflict detected"
    assert error.value.details["conflicts"] == []
