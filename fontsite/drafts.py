"""Request handlers for article drafts."""

from __future__ import annotations

from http import HTTPStatus
from typing import Any, Protocol

from fontsite.binding import bind_post_form, check, get_article_filter, validate_struct
from fontsite.problem import new_missing_parameter
from fontsite.transfer import ArticleCreation, ArticleFilter, ArticleRevision
from fontsite.web import Request, Response, json_response, no_content

DRAFT = "draft_uuid"
TAG = "tag_id"


class DraftsService(Protocol):
    """What the drafts handler needs from the service behind it."""

    def draft(self, creation: ArticleCreation) -> Any: ...
    def publish(self, draft_uuid: str) -> None: ...
    def list(self, filter: ArticleFilter) -> Any: ...
    def get_by_link(self, link: str) -> Any: ...
    def get(self, draft_uuid: str) -> Any: ...
    def add_tag(self, draft_uuid: str, tag_id: str) -> None: ...
    def remove_tag(self, draft_uuid: str, tag_id: str) -> None: ...
    def share(self, draft_uuid: str) -> str: ...
    def discard(self, draft_uuid: str) -> None: ...
    def revise(self, draft_uuid: str, revision: ArticleRevision) -> None: ...


def _form(request: Request, *names: str) -> tuple[str, ...]:
    """Return the named form values, raising a problem for the first one absent."""
    for name in names:
        if name not in request.form:
            raise new_missing_parameter(name)
    return tuple(request.form[name] for name in names)


class DraftsHandler:
    """Turns requests about drafts into calls on the drafts service."""

    def __init__(self, drafts: DraftsService) -> None:
        self._drafts = drafts

    def start(self, request: Request) -> Response:
        """Start a new draft from the form's title and content."""
        try:
            creation = validate_struct(bind_post_form(request, ArticleCreation()))
            inserted = self._drafts.draft(creation)
        except Exception as exc:
            return check(exc)
        return json_response(HTTPStatus.CREATED, {"draft_uuid": inserted})

    def publish(self, request: Request) -> Response:
        """Publish a draft as an article."""
        try:
            (draft,) = _form(request, DRAFT)
            self._drafts.publish(draft)
        except Exception as exc:
            return check(exc)
        return no_content()

    def list(self, request: Request) -> Response:
        """List drafts matching the query filter."""
        try:
            drafts = self._drafts.list(get_article_filter(request))
        except Exception as exc:
            return check(exc)
        return json_response(HTTPStatus.OK, drafts)

    def get(self, request: Request) -> Response:
        """Return the draft named by the ``draft_uuid`` query parameter."""
        try:
            draft = self._drafts.get(request.query.get(DRAFT, ""))
        except Exception as exc:
            return check(exc)
        return json_response(HTTPStatus.OK, draft)

    def add_tag(self, request: Request) -> Response:
        """Attach a tag to a draft."""
        try:
            self._drafts.add_tag(*_form(request, DRAFT, TAG))
        except Exception as exc:
            return check(exc)
        return no_content()

    def remove_tag(self, request: Request) -> Response:
        """Detach a tag from a draft."""
        try:
            self._drafts.remove_tag(*_form(request, DRAFT, TAG))
        except Exception as exc:
            return check(exc)
        return no_content()

    def share(self, request: Request) -> Response:
        """Return a shareable link to a draft."""
        try:
            (draft,) = _form(request, DRAFT)
            link = self._drafts.share(draft)
        except Exception as exc:
            return check(exc)
        return json_response(HTTPStatus.OK, {"shareable_link": link})

    def discard(self, request: Request) -> Response:
        """Discard a draft."""
        try:
            (draft,) = _form(request, DRAFT)
            self._drafts.discard(draft)
        except Exception as exc:
            return check(exc)
        return no_content()

    def revise(self, request: Request) -> Response:
        """Apply a revision taken from the form to a draft."""
        try:
            (draft,) = _form(request, DRAFT)
            revision = validate_struct(bind_post_form(request, ArticleRevision()))
            self._drafts.revise(draft, revision)
        except Exception as exc:
            return check(exc)
        return no_content()