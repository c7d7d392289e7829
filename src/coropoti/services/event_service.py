import logging
from typing import Any, Dict, List, Optional, Sequence, Tuple

from app_lib.api.client import api_client
from app_lib.exceptions import APIException, NotFoundException, ServerRejectedException
from app_lib.scheduling.validation import EventForm, validate_event_form
from config.settings import config
from models.models import (
    CancelRequest,
    ConflictCandidate,
    ConflictRow,
    Event,
    EventMove,
    EventPayload,
    RsvpRequest,
)

logger = logging.getLogger(__name__)

# (file name, content, mime type)
UploadFile = Tuple[str, bytes, Optional[str]]


def _rows(response: Any, key: str) -> List[Dict[str, Any]]:
    """List payloads arrive either bare or wrapped as {key: [...]}."""
    if isinstance(response, list):
        return response
    if isinstance(response, dict):
        return response.get(key) or []
    return []


class EventService:
    def __init__(self, client=None):
        self.client = client or api_client
        self.endpoints = config.endpoints

    def list_events(
        self,
        start: Optional[str] = None,
        end: Optional[str] = None,
        q: Optional[str] = None,
    ) -> List[Event]:
        params = {}
        if start:
            params['start'] = start
        if end:
            params['end'] = end
        if q and q.strip():
            params['q'] = q.strip()
        response = self.client.get(self.endpoints.events, params=params or None, timeout=config.request_timeout)
        return [Event(**row) for row in _rows(response, 'events')]

    def get_event(self, event_id) -> Event:
        url = self.endpoints.event(event_id)
        try:
            response = self.client.get(url, timeout=config.request_timeout)
        except ServerRejectedException as e:
            if e.status_code == 404:
                raise NotFoundException("Event", event_id, url=url) from e
            raise
        return Event(**response)

    def create_event(self, payload: EventPayload, attachment: Optional[UploadFile] = None) -> Dict[str, Any]:
        # Always multipart: every field is a form part, the attachment is optional
        files = [(key, (None, value)) for key, value in payload.to_form_fields().items()]
        if attachment:
            name, content, mime = attachment
            files.append(('attachment', (name, content, mime or 'application/octet-stream')))
        return self.client.upload(self.endpoints.events, files=files, timeout=config.upload_timeout)

    def update_event(self, event_id, payload: EventPayload) -> Dict[str, Any]:
        return self.client.put(self.endpoints.event(event_id), data=payload.to_json(), timeout=config.request_timeout)

    def move_event(self, event_id, move: EventMove) -> Dict[str, Any]:
        return self.client.put(self.endpoints.event(event_id), data=move.to_json(), timeout=config.request_timeout)

    def delete_event(self, event_id) -> Dict[str, Any]:
        return self.client.delete(self.endpoints.event(event_id), timeout=config.request_timeout)

    def rsvp(self, event_id, request: RsvpRequest) -> Event:
        self.client.post(f"{self.endpoints.event(event_id)}/rsvp", data=request.to_json(), timeout=config.request_timeout)
        return self.get_event(event_id)

    def cancel_event(self, event_id, request: CancelRequest) -> Event:
        self.client.post(f"{self.endpoints.event(event_id)}/cancel", data=request.to_json(), timeout=config.request_timeout)
        return self.get_event(event_id)

    def upload_post_document(self, event_id, document: UploadFile) -> Event:
        name, content, mime = document
        files = [('file', (name, content, mime or 'application/octet-stream'))]
        self.client.upload(f"{self.endpoints.event(event_id)}/post-document", files=files, timeout=config.upload_timeout)
        return self.get_event(event_id)

    def conflicts(self) -> List[ConflictRow]:
        response = self.client.get(f"{self.endpoints.events}/conflicts", timeout=config.request_timeout)
        return [ConflictRow(**row) for row in _rows(response, 'conflicts')]

    def conflicts_list(self) -> List[ConflictRow]:
        response = self.client.get(f"{self.endpoints.events}/conflicts/list", timeout=config.request_timeout)
        return [ConflictRow(**row) for row in _rows(response, 'conflicts')]

    def check_conflict(self, query: Optional[Dict[str, Any]]) -> List[ConflictCandidate]:
        """Pre-check for the event form. Best effort: a failed check reports no conflicts."""
        if not query:
            return []
        try:
            response = self.client.post(f"{self.endpoints.events}/check-conflict", data=query, timeout=config.request_timeout)
        except APIException as e:
            logger.warning(f"Conflict pre-check failed: {e.message}")
            return []
        return [ConflictCandidate(**row) for row in _rows(response, 'conflicts')]

    def save_event(
        self,
        form: EventForm,
        event_id=None,
        original_date: Optional[str] = None,
        conflicts: Sequence[ConflictCandidate] = (),
        attachment: Optional[UploadFile] = None,
    ) -> Dict[str, Any]:
        """
        Validate and submit the event form.

        Raises ValidationException before any request when the form is
        invalid. When the server rejects the save the conflict list is
        fetched again and attached to the exception as `details['conflicts']`.
        """
        is_edit = event_id is not None
        payload = validate_event_form(form, is_edit=is_edit, original_date=original_date, conflicts=conflicts)
        try:
            if is_edit:
                return self.update_event(event_id, payload)
            return self.create_event(payload, attachment=attachment)
        except ServerRejectedException as e:
            # The refreshed list never replaces the rejection being raised
            e.details['conflicts'] = self.check_conflict(form.conflict_query(is_edit, event_id))
            raise


# Export singleton
event_service = EventService()
