"""Minimal request and response values exchanged with handlers."""

from __future__ import annotations

import dataclasses
import datetime
import enum
import json
import uuid
from dataclasses import dataclass, field
from http import HTTPStatus
from typing import Any

from fontsite.problem import MEDIA_TYPE, Problem

JSON_CONTENT_TYPE = "application/json; charset=utf-8"

_ESCAPES = {
    "<": "\\u003c",
    ">": "\\u003e",
    "&": "\\u0026",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
}


@dataclass
class Request:
    """An incoming request: query parameters, form parameters and raw body."""

    query: dict[str, str] = field(default_factory=dict)
    form: dict[str, str] = field(default_factory=dict)
    body: bytes = b""


@dataclass
class Response:
    """An outgoing response."""

    status: int
    headers: dict[str, str] = field(default_factory=dict)
    body: bytes = b""


def _encode(value: Any) -> Any:
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return dataclasses.asdict(value)
    if isinstance(value, uuid.UUID):
        return str(value)
    if isinstance(value, (datetime.datetime, datetime.date, datetime.time)):
        return value.isoformat()
    if isinstance(value, enum.Enum):
        return value.value
    if isinstance(value, (set, frozenset, tuple)):
        return list(value)
    raise TypeError(f"object of type {type(value).__name__} is not JSON serializable")


def _dumps(payload: Any) -> str:
    text = json.dumps(payload, separators=(",", ":"), ensure_ascii=False, default=_encode)
    for char, escape in _ESCAPES.items():
        text = text.replace(char, escape)
    return text


def json_response(status: int, payload: Any) -> Response:
    """Serialise ``payload`` as compact JSON with HTML-sensitive characters escaped."""
    return Response(
        status=int(status),
        headers={"Content-Type": JSON_CONTENT_TYPE},
        body=_dumps(payload).encode("utf-8"),
    )


def problem_response(problem: Problem) -> Response:
    """Render a problem as an application/problem+json response."""
    return Response(
        status=problem.status,
        headers={"Content-Type": MEDIA_TYPE},
        body=problem.to_json().encode("utf-8"),
    )


def no_content() -> Response:
    """An empty 204 response."""
    return Response(status=HTTPStatus.NO_CONTENT)