"""Request handlers for article patches."""

from __future__ import annotations

from http import HTTPStatus
from typing import Any, Protocol

from fontsite.binding import bind_post_form, check
from fontsite.problem import new_missing_parameter
from fontsite.transfer import ArticleRevision
from fontsite.web import Request, Response, json_response, no_content

PATCH = "patch_uuid"


class PatchesService(Protocol):
    """What the patches handler needs from the service behind it."""

    def list(self) -> Any: ...
    def revise(self, patch_uuid: str, revision: ArticleRevision) -> None: ...
    def share(self, patch_uuid: str) -> str: ...
    def discard(self, patch_uuid: str) -> None: ...
    def release(self, patch_uuid: str) -> None: ...


def _patch(request: Request) -> str:
    if PATCH not in request.form:
        raise new_missing_parameter(PATCH)
    return request.form[PATCH]


class PatchesHandler:
    """Turns requests about patches into calls on the patches service."""

    def __init__(self, patches: PatchesService) -> None:
        self._patches = patches

    def list(self, request: Request) -> Response:
        """List every pending patch."""
        try:
            patches = self._patches.list()
        except Exception as exc:
            return check(exc)
        return json_response(HTTPStatus.OK, patches)

    def revise(self, request: Request) -> Response:
        """Apply a revision taken from the form to a patch."""
        try:
            patch = _patch(request)
            revision = bind_post_form(request, ArticleRevision())
            self._patches.revise(patch, revision)
        except Exception as exc:
            return check(exc)
        return no_content()

    def share(self, request: Request) -> Response:
        """Return a shareable link to a patch."""
        try:
            link = self._patches.share(_patch(request))
        except Exception as exc:
            return check(exc)
        return json_response(HTTPStatus.OK, {"shareable_link": link})

    def discard(self, request: Request) -> Response:
        """Discard a patch."""
        try:
            self._patches.discard(_patch(request))
        except Exception as exc:
            return check(exc)
        return no_content()

    def release(self, request: Request) -> Response:
        """Release a patch into its article."""
        try:
            self._patches.release(_patch(request))
        except Exception as exc:
            return check(exc)
        return no_content()