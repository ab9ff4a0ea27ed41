"""Data carried from requests into the services."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any, NamedTuple

REQUIRED = "required"


class Failure(NamedTuple):
    """A validation criterion a field did not meet."""

    field: str
    criterion: str
    parameter: str = ""


def _required(default: Any = "") -> Any:
    return field(default=default, metadata={"rules": (REQUIRED,)})


def _failures(obj: Any) -> list[Failure]:
    failures = []
    for spec in fields(obj):
        value = getattr(obj, spec.name)
        for rule in spec.metadata.get("rules", ()):
            if rule == REQUIRED and not value:
                failures.append(Failure(spec.name, REQUIRED))
    return failures


@dataclass
class Publication:
    """A month of publication."""

    year: int
    month: int


@dataclass
class ArticleFilter:
    """Search, topic, paging and publication filters for article listings."""

    search: str = ""
    topic: str = ""
    page: int = 0
    rpp: int = 0
    publication: Publication | None = None


@dataclass
class ArticleCreation:
    """The data needed to start a draft."""

    title: str = _required()
    content: str = _required()

    def validate(self) -> list[Failure]:
        """Return the criteria this creation does not meet."""
        return _failures(self)


@dataclass
class ArticleRevision:
    """Changes to a draft or a patch; every field is optional."""

    title: str = ""
    content: str = ""

    def validate(self) -> list[Failure]:
        """Return the criteria this revision does not meet."""
        return _failures(self)


@dataclass
class ExperienceCreation:
    """The data needed to record a new experience."""

    starts: str = _required()
    ends: str = ""
    job_title: str = _required()
    company: str = _required()
    country: str = ""
    summary: str = ""

    def validate(self) -> list[Failure]:
        """Return the criteria this creation does not meet."""
        return _failures(self)


@dataclass
class ExperienceUpdate:
    """Changes to an experience; every field is optional."""

    starts: str = ""
    ends: str = ""
    job_title: str = ""
    company: str = ""
    country: str = ""
    summary: str = ""
    active: bool = False

    def validate(self) -> list[Failure]:
        """Return the criteria this update does not meet."""
        return _failures(self)


@dataclass
class MeUpdate:
    """Changes to the profile; empty fields are left as they are."""

    summary: str = ""
    job_title: str = ""
    email: str = ""
    photo_url: str = ""
    resume_url: str = ""
    company: str = ""
    location: str = ""
    github_url: str = ""
    linkedin_url: str = ""
    youtube_url: str = ""
    twitter_url: str = ""
    instagram_url: str = ""