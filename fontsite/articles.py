"""Request handlers for published articles."""

from __future__ import annotations

from http import HTTPStatus
from typing import Any, Protocol

from fontsite.binding import check, get_article_filter
from fontsite.problem import new_missing_parameter
from fontsite.transfer import ArticleFilter
from fontsite.web import Request, Response, json_response, no_content

ARTICLE = "article_uuid"
TAG = "tag_id"


class ArticlesService(Protocol):
    """What the articles handler needs from the service behind it."""

    def list(self, filter: ArticleFilter) -> Any: ...
    def list_hidden(self, filter: ArticleFilter) -> Any: ...
    def get_by_id(self, article_uuid: str) -> Any: ...
    def hide(self, article_uuid: str) -> None: ...
    def show(self, article_uuid: str) -> None: ...
    def amend(self, article_uuid: str) -> None: ...
    def set_slug(self, article_uuid: str, slug: str) -> None: ...
    def set_summary(self, article_uuid: str, summary: str) -> None: ...
    def set_cover(self, article_uuid: str, cover_url: str, cover_caption: str) -> None: ...
    def remove(self, article_uuid: str) -> None: ...
    def pin(self, article_uuid: str) -> None: ...
    def unpin(self, article_uuid: str) -> None: ...
    def add_tag(self, article_uuid: str, tag_id: str) -> None: ...
    def remove_tag(self, article_uuid: str, tag_id: str) -> None: ...


def _form(request: Request, *names: str) -> tuple[str, ...]:
    """Return the named form values, raising a problem for the first one absent."""
    for name in names:
        if name not in request.form:
            raise new_missing_parameter(name)
    return tuple(request.form[name] for name in names)


class ArticlesHandler:
    """Turns requests about articles into calls on the articles service."""

    def __init__(self, articles: ArticlesService) -> None:
        self._articles = articles

    def list(self, request: Request) -> Response:
        """List published articles matching the query filter."""
        try:
            articles = self._articles.list(get_article_filter(request))
        except Exception as exc:
            return check(exc)
        return json_response(HTTPStatus.OK, articles)

    def list_hidden(self, request: Request) -> Response:
        """List hidden articles matching the query filter."""
        try:
            articles = self._articles.list_hidden(get_article_filter(request))
        except Exception as exc:
            return check(exc)
        return json_response(HTTPStatus.OK, articles)

    def get(self, request: Request) -> Response:
        """Return the article named by the ``article_uuid`` query parameter."""
        try:
            article = self._articles.get_by_id(request.query.get(ARTICLE, ""))
        except Exception as exc:
            return check(exc)
        return json_response(HTTPStatus.OK, article)

    def _act(self, request: Request, action: str, *names: str) -> Response:
        try:
            values = _form(request, ARTICLE, *names)
            getattr(self._articles, action)(*values)
        except Exception as exc:
            return check(exc)
        return no_content()

    def hide(self, request: Request) -> Response:
        """Hide an article."""
        return self._act(request, "hide")

    def show(self, request: Request) -> Response:
        """Show a hidden article."""
        return self._act(request, "show")

    def amend(self, request: Request) -> Response:
        """Start a patch of an article."""
        return self._act(request, "amend")

    def set_slug(self, request: Request) -> Response:
        """Change the slug of an article."""
        return self._act(request, "set_slug", "slug")

    def set_summary(self, request: Request) -> Response:
        """Change the summary of an article."""
        return self._act(request, "set_summary", "summary")

    def set_cover(self, request: Request) -> Response:
        """Change the cover image and caption of an article."""
        try:
            (article,) = _form(request, ARTICLE)
            self._articles.set_cover(
                article, request.form.get("url", ""), request.form.get("caption", "")
            )
        except Exception as exc:
            return check(exc)
        return no_content()

    def remove(self, request: Request) -> Response:
        """Remove an article."""
        return self._act(request, "remove")

    def pin(self, request: Request) -> Response:
        """Pin an article."""
        return self._act(request, "pin")

    def unpin(self, request: Request) -> Response:
        """Unpin an article."""
        return self._act(request, "unpin")

    def add_tag(self, request: Request) -> Response:
        """Attach a tag to an article."""
        return self._act(request, "add_tag", TAG)

    def remove_tag(self, request: Request) -> Response:
        """Detach a tag from an article."""
        return self._act(request, "remove_tag", TAG)