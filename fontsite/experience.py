"""Request handlers for work experience entries."""

from __future__ import annotations

import datetime
from http import HTTPStatus
from typing import Any, Callable, Protocol

from fontsite.binding import bind_post_form, check, validate_struct
from fontsite.problem import new_missing_parameter
from fontsite.transfer import ExperienceCreation, ExperienceUpdate
from fontsite.web import Request, Response, json_response, no_content

EXPERIENCE = "experience_uuid"


class ExperienceService(Protocol):
    """What the experience handler needs from the service behind it."""

    def list(self, hidden: bool = False) -> Any: ...
    def get(self, experience_uuid: str) -> Any: ...
    def create(self, creation: ExperienceCreation) -> str: ...
    def update(self, experience_uuid: str, update: ExperienceUpdate) -> None: ...
    def hide(self, experience_uuid: str) -> None: ...
    def show(self, experience_uuid: str) -> None: ...
    def remove(self, experience_uuid: str) -> None: ...


def _experience(request: Request) -> str:
    if EXPERIENCE not in request.form:
        raise new_missing_parameter(EXPERIENCE)
    return request.form[EXPERIENCE]


class ExperienceHandler:
    """Turns requests about experience into calls on the experience service."""

    def __init__(
        self,
        service: ExperienceService,
        today: Callable[[], datetime.date] = datetime.date.today,
    ) -> None:
        self._service = service
        self._today = today

    def list(self, request: Request) -> Response:
        """List visible experience entries."""
        try:
            entries = self._service.list()
        except Exception as exc:
            return check(exc)
        return json_response(HTTPStatus.OK, entries)

    def list_hidden(self, request: Request) -> Response:
        """List hidden experience entries."""
        try:
            entries = self._service.list(True)
        except Exception as exc:
            return check(exc)
        return json_response(HTTPStatus.OK, entries)

    def get(self, request: Request) -> Response:
        """Return the entry named by the ``experience_uuid`` query parameter."""
        try:
            entry = self._service.get(request.query.get(EXPERIENCE, ""))
        except Exception as exc:
            return check(exc)
        return json_response(HTTPStatus.OK, entry)

    def create(self, request: Request) -> Response:
        """Record a new entry from the form values."""
        try:
            creation = validate_struct(bind_post_form(request, ExperienceCreation()))
            created = self._service.create(creation)
        except Exception as exc:
            return check(exc)
        return json_response(HTTPStatus.CREATED, {"inserted_id": created})

    def set(self, request: Request) -> Response:
        """Update an entry from the form values."""
        try:
            entry = _experience(request)
            update = validate_struct(bind_post_form(request, ExperienceUpdate()))
            self._service.update(entry, update)
        except Exception as exc:
            return check(exc)
        return no_content()

    def hide(self, request: Request) -> Response:
        """Hide an entry."""
        try:
            self._service.hide(_experience(request))
        except Exception as exc:
            return check(exc)
        return no_content()

    def show(self, request: Request) -> Response:
        """Show a hidden entry."""
        try:
            self._service.show(_experience(request))
        except Exception as exc:
            return check(exc)
        return no_content()

    def quit(self, request: Request) -> Response:
        """Mark an entry as no longer active, ending today."""
        try:
            entry = _experience(request)
            update = ExperienceUpdate(active=False, ends=self._today().isoformat())
            self._service.update(entry, update)
        except Exception as exc:
            return check(exc)
        return no_content()

    def remove(self, request: Request) -> Response:
        """Remove an entry."""
        try:
            self._service.remove(_experience(request))
        except Exception as exc:
            return check(exc)
        return no_content()