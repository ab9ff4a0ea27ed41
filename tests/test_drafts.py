import json
import uuid

import pytest

from fontsite.drafts import DraftsHandler
from fontsite.problem import Problem
from fontsite.transfer import ArticleCreation, ArticleFilter, ArticleRevision
from fontsite.web import Request

PROBLEM_DETAIL = "Expected problem detail."
UNEXPECTED = "An unexpected error occurred while processing your request"


class FakeDrafts:
    def __init__(self, returns=None, error=None):
        self.returns = returns
        self.error = error
        self.calls = []

    def _record(self, name, *args):
        self.calls.append((name, args))
        if self.error is not None:
            raise self.error
        return self.returns

    def draft(self, creation):
        return self._record("draft", creation)

    def publish(self, draft_uuid):
        return self._record("publish", draft_uuid)

    def list(self, filter):
        return self._record("list", filter)

    def get_by_link(self, link):
        return self._record("get_by_link", link)

    def get(self, draft_uuid):
        return self._record("get", draft_uuid)

    def add_tag(self, draft_uuid, tag_id):
        return self._record("add_tag", draft_uuid, tag_id)

    def remove_tag(self, draft_uuid, tag_id):
        return self._record("remove_tag", draft_uuid, tag_id)

    def share(self, draft_uuid):
        return self._record("share", draft_uuid)

    def discard(self, draft_uuid):
        return self._record("discard", draft_uuid)

    def revise(self, draft_uuid, revision):
        return self._record("revise", draft_uuid, revision)


def expected_problem():
    return Problem(status=400, detail=PROBLEM_DETAIL)


DRAFT_ID = str(uuid.uuid4())
TAG_ID = str(uuid.uuid4())

REQUESTS = {
    "start": Request(form={"title": "Title", "content": "Content"}),
    "publish": Request(form={"draft_uuid": DRAFT_ID}),
    "list": Request(),
    "get": Request(query={"draft_uuid": DRAFT_ID}),
    "add_tag": Request(form={"draft_uuid": DRAFT_ID, "tag_id": TAG_ID}),
    "remove_tag": Request(form={"draft_uuid": DRAFT_ID, "tag_id": TAG_ID}),
    "share": Request(form={"draft_uuid": DRAFT_ID}),
    "discard": Request(form={"draft_uuid": DRAFT_ID}),
    "revise": Request(form={"draft_uuid": DRAFT_ID, "title": "Title", "content": "Content"}),
}


def test_start_success():
    inserted = uuid.uuid4()
    service = FakeDrafts(returns=inserted)
    response = DraftsHandler(service).start(REQUESTS["start"])
    assert response.status == 201
    assert response.body == json.dumps(
        {"draft_uuid": str(inserted)}, separators=(",", ":")
    ).encode()
    assert service.calls == [("draft", (ArticleCreation(title="Title", content="Content"),))]


def test_start_trims_values():
    service = FakeDrafts(returns=uuid.uuid4())
    request = Request(form={"title": "  Title \n", "content": "\tContent  "})
    DraftsHandler(service).start(request)
    assert service.calls == [("draft", (ArticleCreation(title="Title", content="Content"),))]


def test_start_validation_failure():
    service = FakeDrafts(returns=uuid.uuid4())
    response = DraftsHandler(service).start(Request(form={"title": "Title"}))
    assert response.status == 422
    assert service.calls == []
    document = json.loads(response.body)
    assert document["title"] == "Failed to validate request data."
    assert document["errors"] == [{"field": "content", "criterion": "required"}]


def test_publish_success():
    service = FakeDrafts()
    response = DraftsHandler(service).publish(REQUESTS["publish"])
    assert response.status == 204
    assert response.body == b""
    assert service.calls == [("publish", (DRAFT_ID,))]


def test_list_success_without_search():
    drafts = [{}, {}, {}]
    service = FakeDrafts(returns=drafts)
    response = DraftsHandler(service).list(REQUESTS["list"])
    assert response.status == 200
    assert response.body == b"[{},{},{}]"
    assert service.calls == [("list", (ArticleFilter(page=1, rpp=20),))]


def test_get_success():
    draft = {"uuid": DRAFT_ID}
    service = FakeDrafts(returns=draft)
    response = DraftsHandler(service).get(REQUESTS["get"])
    assert response.status == 200
    assert json.loads(response.body) == draft
    assert service.calls == [("get", (DRAFT_ID,))]


@pytest.mark.parametrize("action", ["add_tag", "remove_tag"])
def test_tags_success(action):
    service = FakeDrafts()
    response = getattr(DraftsHandler(service), action)(REQUESTS[action])
    assert response.status == 204
    assert response.body == b""
    assert service.calls == [(action, (DRAFT_ID, TAG_ID))]


def test_share_success():
    link = "/link/to/draft"
    service = FakeDrafts(returns=link)
    response = DraftsHandler(service).share(REQUESTS["share"])
    assert response.status == 200
    assert response.body == b'{"shareable_link":"/link/to/draft"}'
    assert service.calls == [("share", (DRAFT_ID,))]


def test_discard_success():
    service = FakeDrafts()
    response = DraftsHandler(service).discard(REQUESTS["discard"])
    assert response.status == 204
    assert service.calls == [("discard", (DRAFT_ID,))]


def test_revise_success():
    service = FakeDrafts()
    response = DraftsHandler(service).revise(REQUESTS["revise"])
    assert response.status == 204
    assert response.body == b""
    assert service.calls == [
        ("revise", (DRAFT_ID, ArticleRevision(title="Title", content="Content")))
    ]


@pytest.mark.parametrize("action", sorted(REQUESTS))
def test_expected_problem_detail(action):
    service = FakeDrafts(error=expected_problem())
    response = getattr(DraftsHandler(service), action)(REQUESTS[action])
    assert response.status == 400
    assert PROBLEM_DETAIL in response.body.decode()
    assert "application/problem+json" in response.headers["Content-Type"]


@pytest.mark.parametrize("action", sorted(REQUESTS))
def test_unexpected_error(action):
    service = FakeDrafts(error=RuntimeError("unexpected error"))
    response = getattr(DraftsHandler(service), action)(REQUESTS[action])
    assert response.status == 500
    assert UNEXPECTED in response.body.decode()
    assert "application/problem+json" in response.headers["Content-Type"]


@pytest.mark.parametrize(
    "action, form, missing",
    [
        ("publish", {}, "draft_uuid"),
        ("share", {}, "draft_uuid"),
        ("discard", {}, "draft_uuid"),
        ("revise", {"title": "Title"}, "draft_uuid"),
        ("add_tag", {"tag_id": TAG_ID}, "draft_uuid"),
        ("add_tag", {"draft_uuid": DRAFT_ID}, "tag_id"),
        ("remove_tag", {"draft_uuid": DRAFT_ID}, "tag_id"),
    ],
)
def test_missing_parameter(action, form, missing):
    service = FakeDrafts()
    response = getattr(DraftsHandler(service), action)(Request(form=form))
    assert response.status == 400
    assert service.calls == []
    assert (
        f"The '{missing}' parameter is required but was not found in the request form data."
        in response.body.decode()
    )