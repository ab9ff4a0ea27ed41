"""Problem details (application/problem+json) raised by handlers and services."""

from __future__ import annotations

import json
from http import HTTPStatus
from typing import Any

MEDIA_TYPE = "application/problem+json"

TYPE_DEFAULT = "about:blank"
TYPE_INTERNAL = "urn:problem:internal"
TYPE_MISSING_PARAMETER = "urn:problem:missing-parameter"
TYPE_UNPARSEABLE_VALUE = "urn:problem:unparseable-value"
TYPE_VALUE_OUT_OF_RANGE = "urn:problem:value-out-of-range"
TYPE_UNMET_VALIDATION = "urn:problem:unmet-validation"

_MEMBERS = ("type", "title", "status", "detail", "instance")


class Problem(Exception):
    """An error that carries an HTTP problem-details document."""

    def __init__(
        self,
        *,
        type: str = TYPE_DEFAULT,
        title: str = "",
        status: int = HTTPStatus.INTERNAL_SERVER_ERROR,
        detail: str = "",
        instance: str = "",
        extensions: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(detail or title)
        self.type = type
        self.title = title
        self.status = int(status)
        self.detail = detail
        self.instance = instance
        self.extensions: dict[str, Any] = {}
        for key, value in (extensions or {}).items():
            self.add(key, value)

    def __str__(self) -> str:
        text = " ".join(part for part in (self.title, self.detail) if part)
        if text:
            return text
        try:
            return HTTPStatus(self.status).phrase
        except ValueError:
            return f"status {self.status}"

    def __repr__(self) -> str:
        return f"Problem(status={self.status}, title={self.title!r}, detail={self.detail!r})"

    def add(self, key: str, value: Any) -> Problem:
        """Attach an extension member; repeated keys collect their values in a list."""
        if key in _MEMBERS:
            raise ValueError(f"{key!r} is a standard problem member, not an extension")
        if key not in self.extensions:
            self.extensions[key] = value
        elif isinstance(self.extensions[key], list):
            self.extensions[key].append(value)
        else:
            self.extensions[key] = [self.extensions[key], value]
        return self

    def to_dict(self) -> dict[str, Any]:
        """Return the document as a dictionary, leaving out empty members."""
        document: dict[str, Any] = {}
        for name in _MEMBERS:
            value = getattr(self, name)
            if value not in ("", 0, None):
                document[name] = value
        document.update(self.extensions)
        return document

    def to_json(self) -> str:
        """Return the document as compact JSON."""
        return json.dumps(self.to_dict(), separators=(",", ":"), ensure_ascii=False, default=str)


def new_internal() -> Problem:
    """The problem reported for any error the caller was not meant to see."""
    return Problem(
        type=TYPE_INTERNAL,
        title="Internal server error.",
        status=HTTPStatus.INTERNAL_SERVER_ERROR,
        detail=(
            "An unexpected error occurred while processing your request. "
            "Please try again later."
        ),
    )


def new_missing_parameter(name: str) -> Problem:
    """The problem reported when a required form parameter is absent."""
    return Problem(
        type=TYPE_MISSING_PARAMETER,
        title="Missing required parameter.",
        status=HTTPStatus.BAD_REQUEST,
        detail=f"The '{name}' parameter is required but was not found in the request form data.",
        extensions={"parameter": name},
    )


def new_unparsable_value(target_type: str, field_name: str, value: str) -> Problem:
    """The problem reported when a value cannot be parsed as its target type."""
    return Problem(
        type=TYPE_UNPARSEABLE_VALUE,
        title="Failure when parsing value.",
        status=HTTPStatus.UNPROCESSABLE_ENTITY,
        detail=(
            f"Failed to parse the provided value as: {target_type}. "
            "Please make sure the value is valid according to its type."
        ),
        extensions={"field": field_name, "value": value},
    )


def new_value_out_of_range(target_type: str, field_name: str, value: str) -> Problem:
    """The problem reported when a parsed value does not fit its target type."""
    return Problem(
        type=TYPE_VALUE_OUT_OF_RANGE,
        title="Value out of range.",
        status=HTTPStatus.UNPROCESSABLE_ENTITY,
        detail=(
            f"The value provided for '{field_name}' is out of range "
            f"for the specified type: {target_type}."
        ),
        extensions={"field": field_name, "value": value},
    )