"""Turning requests into transfer objects, and errors into responses."""

from __future__ import annotations

import logging
import math
import re
import struct
from dataclasses import Field, fields, is_dataclass
from http import HTTPStatus
from typing import Any, TypeVar

from fontsite.problem import (
    TYPE_UNMET_VALIDATION,
    Problem,
    new_internal,
    new_unparsable_value,
    new_value_out_of_range,
)
from fontsite.transfer import ArticleFilter, Failure, Publication
from fontsite.web import Request, Response, problem_response

logger = logging.getLogger(__name__)

# Field metadata keys understood by bind_post_form.
FORM = "form"
BITS = "bits"

DEFAULT_PAGE = 1
DEFAULT_RPP = 20

_INT64_MIN = -(1 << 63)
_INT64_MAX = (1 << 63) - 1

_WORDS = re.compile(r"\w+", re.ASCII)
_INTEGER = re.compile(r"[+-]?[0-9]+")
_DECIMAL = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")
_HEX = re.compile(r"[+-]?0[xX](?:[0-9a-fA-F]+\.?[0-9a-fA-F]*|\.[0-9a-fA-F]+)[pP][+-]?[0-9]+")
_SPECIAL = re.compile(r"[+-]?(?:inf|infinity)|nan", re.IGNORECASE)
_TRUE = frozenset({"1", "t", "T", "TRUE", "true", "True"})
_FALSE = frozenset({"0", "f", "F", "FALSE", "false", "False"})

_KINDS: dict[Any, type] = {
    str: str,
    int: int,
    float: float,
    bool: bool,
    "str": str,
    "int": int,
    "float": float,
    "bool": bool,
}

T = TypeVar("T")


class _OutOfRange(ValueError):
    def __init__(self, clamped: int) -> None:
        super().__init__("value out of range")
        self.clamped = clamped


def check(error: BaseException) -> Response:
    """Render an error: a problem as itself, anything else as an internal problem."""
    if isinstance(error, Problem):
        return problem_response(error)
    return problem_response(new_internal())


def _parse_int(raw: str, bits: int | None, name: str) -> int:
    target = "int" if bits is None else f"int{bits}"
    width = bits or 32
    if not _INTEGER.fullmatch(raw):
        raise new_unparsable_value(target, name, raw)
    value = int(raw)
    limit = 1 << (width - 1)
    if not -limit <= value < limit:
        raise new_value_out_of_range(target, name, raw)
    return value


def _to_float32(value: float) -> float:
    try:
        return struct.unpack("f", struct.pack("f", value))[0]
    except OverflowError:
        return math.copysign(math.inf, value)


def _parse_float(raw: str, bits: int | None, name: str) -> float:
    target = "float32" if bits == 32 else "float64"
    special = _SPECIAL.fullmatch(raw) is not None
    if special or _DECIMAL.fullmatch(raw):
        value = float(raw)
    elif _HEX.fullmatch(raw):
        try:
            value = float.fromhex(raw)
        except OverflowError:
            raise new_value_out_of_range(target, name, raw) from None
    else:
        raise new_unparsable_value(target, name, raw)
    if math.isinf(value) and not special:
        raise new_value_out_of_range(target, name, raw)
    return _to_float32(value) if bits == 32 else value


def _parse_bool(raw: str, name: str) -> bool:
    if raw in _TRUE:
        return True
    if raw in _FALSE:
        return False
    raise new_unparsable_value("bool", name, raw)


def _field_kind(spec: Field) -> type | None:
    """The scalar type a field holds, whether annotated as a type or as text."""
    annotation = spec.type
    if isinstance(annotation, str):
        annotation = annotation.strip()
    try:
        return _KINDS.get(annotation)
    except TypeError:
        return None


def bind_post_form(request: Request, target: T) -> T:
    """Fill the fields of a dataclass instance from the request's form values.

    A field is read from the form key named by its ``form`` metadata, or by its
    own name; fields starting with an underscore or whose ``form`` is empty are
    left alone. Values are trimmed and parsed by the field's type; ``bits``
    metadata narrows integers and selects single-precision floats.
    """
    if request is None or target is None:
        raise ValueError("got an unacceptable nil parameter")
    if not is_dataclass(target) or isinstance(target, type):
        raise TypeError('type of parameter "target" is not a dataclass instance')

    for spec in fields(target):
        if spec.name.startswith("_"):
            continue
        name = spec.metadata.get(FORM, spec.name)
        if not name or name not in request.form:
            continue
        raw = request.form[name].strip()
        kind = _field_kind(spec)
        bits = spec.metadata.get(BITS)
        value: Any
        if kind is str:
            value = raw
        elif kind is bool:
            value = _parse_bool(raw, name)
        elif kind is int:
            value = _parse_int(raw, bits, name)
        elif kind is float:
            value = _parse_float(raw, bits, name)
        else:
            continue
        setattr(target, spec.name, value)
    return target


def _failure_document(failure: Failure) -> dict[str, str]:
    document = {"field": failure.field, "criterion": failure.criterion}
    if failure.parameter:
        document["parameter"] = failure.parameter
    return document


def validate_struct(obj: T) -> T:
    """Return ``obj`` if it meets its criteria, or raise an unmet-validation problem."""
    validate = getattr(obj, "validate", None)
    if validate is None:
        return obj
    failures = validate()
    if failures:
        raise Problem(
            type=TYPE_UNMET_VALIDATION,
            title="Failed to validate request data.",
            status=HTTPStatus.UNPROCESSABLE_ENTITY,
            detail=(
                "The provided data does not meet the required validation criteria. "
                "Please review your input and try again."
            ),
            extensions={"errors": [_failure_document(failure) for failure in failures]},
        )
    return obj


def _atoi(text: str) -> int:
    if not _INTEGER.fullmatch(text):
        raise ValueError(f"invalid syntax: {text!r}")
    value = int(text)
    if value > _INT64_MAX:
        raise _OutOfRange(_INT64_MAX)
    if value < _INT64_MIN:
        raise _OutOfRange(_INT64_MIN)
    return value


def _query_int(text: str) -> int:
    if not text:
        return 0
    try:
        return _atoi(text)
    except _OutOfRange as exc:
        logger.error("value out of range: %r", text)
        return exc.clamped
    except ValueError as exc:
        logger.error("%s", exc)
        return 0


def _publication(text: str) -> Publication | None:
    if not text:
        return None
    parts = text.split("/")
    if len(parts) != 2:
        return None
    try:
        year = _atoi(parts[0])
        month = _atoi(parts[1])
    except ValueError as exc:
        logger.error("%s", exc)
        return None
    if not 1 <= month <= 12:
        return None
    return Publication(year=year, month=month)


def get_article_filter(request: Request) -> ArticleFilter:
    """Build an article filter from the query string, with defaults for paging."""
    query = request.query

    search = query.get("search", "").strip()
    if search:
        search = " ".join(_WORDS.findall(search.replace("_", " ")))

    topic = query.get("topic", "").strip()
    if topic:
        topic = "-".join(_WORDS.findall(topic))

    page = _query_int(query.get("page", ""))
    rpp = _query_int(query.get("rpp", ""))

    return ArticleFilter(
        search=search,
        topic=topic,
        page=page if page > 0 else DEFAULT_PAGE,
        rpp=rpp if rpp > 0 else DEFAULT_RPP,
        publication=_publication(query.get("from", "")),
    )