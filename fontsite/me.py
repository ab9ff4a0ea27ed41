"""Request handlers for the site owner's profile."""

from __future__ import annotations

from http import HTTPStatus
from typing import Any, Protocol

from fontsite.binding import bind_post_form, check
from fontsite.problem import TYPE_UNPARSEABLE_VALUE, Problem, new_missing_parameter
from fontsite.transfer import MeUpdate
from fontsite.web import Request, Response, json_response, no_content

_TRUE = frozenset({"1", "t", "T", "TRUE", "true", "True"})
_FALSE = frozenset({"0", "f", "F", "FALSE", "false", "False"})


class MeService(Protocol):
    """What the profile handler needs from the service behind it."""

    def get(self) -> Any: ...
    def update(self, update: MeUpdate) -> None: ...
    def set_hireable(self, hireable: bool) -> None: ...


def _required(request: Request, name: str) -> str:
    value = request.form.get(name, "").strip()
    if not value:
        raise new_missing_parameter(name)
    return value


def _parse_hireable(value: str) -> bool:
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise Problem(
        type=TYPE_UNPARSEABLE_VALUE,
        title="Failure when parsing boolean value.",
        status=HTTPStatus.UNPROCESSABLE_ENTITY,
        detail=(
            "Failed to parse the provided value as a boolean. "
            "Please ensure the value is either 'true' or 'false'."
        ),
        extensions={"value": value},
    )


class MeHandler:
    """Turns requests about the profile into calls on the profile service."""

    def __init__(self, service: MeService) -> None:
        self._service = service

    def get(self, request: Request) -> Response:
        """Return the profile."""
        try:
            me = self._service.get()
        except Exception as exc:
            return check(exc)
        return json_response(HTTPStatus.OK, me)

    def set_photo(self, request: Request) -> Response:
        """Change the profile photo."""
        try:
            self._service.update(MeUpdate(photo_url=_required(request, "photo_url")))
        except Exception as exc:
            return check(exc)
        return no_content()

    def set_resume(self, request: Request) -> Response:
        """Change the résumé link."""
        try:
            self._service.update(MeUpdate(resume_url=_required(request, "resume_url")))
        except Exception as exc:
            return check(exc)
        return no_content()

    def set_hireable(self, request: Request) -> Response:
        """Mark the profile as open or closed to hiring."""
        try:
            hireable = _parse_hireable(_required(request, "hireable"))
            self._service.set_hireable(hireable)
        except Exception as exc:
            return check(exc)
        return no_content()

    def set(self, request: Request) -> Response:
        """Update the profile from the form values given."""
        try:
            self._service.update(bind_post_form(request, MeUpdate()))
        except Exception as exc:
            return check(exc)
        return no_content()