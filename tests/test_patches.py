import uuid

import pytest

from fontsite.patches import PatchesHandler
from fontsite.problem import Problem
from fontsite.transfer import ArticleRevision
from fontsite.web import Request

PATCH_ID = str(uuid.uuid4())
PROBLEM_DETAIL = "Expected problem detail."
UNEXPECTED = "An unexpected error occurred while processing your request"
LINK = "/link/to/draft"


class FakePatches:
    def __init__(self, result=None, error=None):
        self.result = result
        self.error = error
        self.calls = []

    def _record(self, name, *args):
        self.calls.append((name, args))
        if self.error is not None:
            raise self.error
        return self.result

    def list(self):
        return self._record("list")

    def revise(self, patch_uuid, revision):
        return self._record("revise", patch_uuid, revision)

    def share(self, patch_uuid):
        return self._record("share", patch_uuid)

    def discard(self, patch_uuid):
        return self._record("discard", patch_uuid)

    def release(self, patch_uuid):
        return self._record("release", patch_uuid)


def revise_request():
    return Request(form={"patch_uuid": PATCH_ID, "title": "Title", "content": "Content"})


def test_list_success():
    service = FakePatches(result=[{}, {}, {}])
    response = PatchesHandler(service).list(Request())
    assert response.status == 200
    assert response.body == b"[{},{},{}]"
    assert "Set-Cookie" not in response.headers


def test_list_expected_problem():
    service = FakePatches(error=Problem(status=400, detail=PROBLEM_DETAIL))
    response = PatchesHandler(service).list(Request())
    assert response.status == 400
    assert PROBLEM_DETAIL in response.body.decode()
    assert "application/problem+json" in response.headers["Content-Type"]


def test_list_unexpected_error():
    service = FakePatches(error=RuntimeError("unexpected error"))
    response = PatchesHandler(service).list(Request())
    assert response.status == 500
    assert UNEXPECTED in response.body.decode()
    assert "application/problem+json" in response.headers["Content-Type"]


def test_revise_success():
    service = FakePatches()
    response = PatchesHandler(service).revise(revise_request())
    assert response.status == 204
    assert response.body == b""
    assert service.calls == [("revise", (PATCH_ID, ArticleRevision(title="Title", content="Content")))]


def test_revise_trims_form_values():
    service = FakePatches()
    request = Request(form={"patch_uuid": PATCH_ID, "title": "  Title \n"})
    PatchesHandler(service).revise(request)
    assert service.calls == [("revise", (PATCH_ID, ArticleRevision(title="Title")))]


def test_share_success():
    service = FakePatches(result=LINK)
    response = PatchesHandler(service).share(Request(form={"patch_uuid": PATCH_ID}))
    assert response.status == 200
    assert response.body == b'{"shareable_link":"/link/to/draft"}'
    assert service.calls == [("share", (PATCH_ID,))]


@pytest.mark.parametrize("name", ["discard", "release"])
def test_simple_actions_success(name):
    service = FakePatches()
    response = getattr(PatchesHandler(service), name)(Request(form={"patch_uuid": PATCH_ID}))
    assert response.status == 204
    assert response.body == b""
    assert service.calls == [(name, (PATCH_ID,))]


@pytest.mark.parametrize("name", ["revise", "share", "discard", "release"])
def test_actions_expected_problem(name):
    service = FakePatches(result="about:blank", error=Problem(status=400, detail=PROBLEM_DETAIL))
    response = getattr(PatchesHandler(service), name)(revise_request())
    assert response.status == 400
    assert PROBLEM_DETAIL in response.body.decode()
    assert "application/problem+json" in response.headers["Content-Type"]


@pytest.mark.parametrize("name", ["revise", "share", "discard", "release"])
def test_actions_unexpected_error(name):
    service = FakePatches(result="about:blank", error=RuntimeError("unexpected error"))
    response = getattr(PatchesHandler(service), name)(revise_request())
    assert response.status == 500
    assert UNEXPECTED in response.body.decode()
    assert "application/problem+json" in response.headers["Content-Type"]


@pytest.mark.parametrize("name", ["revise", "share", "discard", "release"])
def test_actions_missing_patch(name):
    service = FakePatches()
    response = getattr(PatchesHandler(service), name)(Request())
    assert response.status == 400
    assert "The 'patch_uuid' parameter is required" in response.body.decode()
    assert service.calls == []