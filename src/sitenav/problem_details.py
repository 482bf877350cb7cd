"""RFC 9457 Problem Details helpers with schema validation.

Resolver failures are reported to the invoking build as Problem Details
payloads. Every payload is validated against :data:`PROBLEM_DETAILS_SCHEMA`
(JSON Schema 2020-12) before it leaves this module.

Examples
--------
>>> from sitenav.problem_details import ProblemDetailsParams, build_problem_details
>>> problem = build_problem_details(
...     ProblemDetailsParams(
...         problem_type="https://sitenav.dev/problems/unknown-slug",
...         title="UnknownSlugError",
...         status=404,
...         detail="Sidebar link references unknown slug 'missing/page'",
...         instance="urn:sitenav:sidebar[0]",
...         code="unknown-slug",
...     )
... )
>>> problem["status"]
404
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import TYPE_CHECKING, Final, TypedDict, cast

from jsonschema import Draft202012Validator
from jsonschema.exceptions import ValidationError

if TYPE_CHECKING:
    from collections.abc import Mapping

__all__ = [
    "PROBLEM_DETAILS_SCHEMA",
    "JsonValue",
    "ProblemDetails",
    "ProblemDetailsParams",
    "ProblemDetailsValidationError",
    "build_problem_details",
    "render_problem",
    "validate_problem_details",
]

type JsonPrimitive = str | int | float | bool | None
type JsonValue = JsonPrimitive | list[JsonValue] | dict[str, JsonValue]

PROBLEM_DETAILS_SCHEMA: Final[dict[str, object]] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "$id": "https://sitenav.dev/schema/problem-details.json",
    "title": "Problem Details",
    "type": "object",
    "required": ["type", "title", "status", "detail", "instance"],
    "properties": {
        "type": {"type": "string", "minLength": 1},
        "title": {"type": "string", "minLength": 1},
        "status": {"type": "integer", "minimum": 100, "maximum": 599},
        "detail": {"type": "string"},
        "instance": {"type": "string", "minLength": 1},
        "code": {"type": "string", "pattern": "^[a-z0-9]+(?:-[a-z0-9]+)*$"},
        "extensions": {"type": "object"},
    },
    "additionalProperties": False,
}

_VALIDATOR = Draft202012Validator(PROBLEM_DETAILS_SCHEMA)


class ProblemDetails(TypedDict, total=False):
    """RFC 9457 Problem Details payload."""

    type: str
    title: str
    status: int
    detail: str
    instance: str
    code: str
    extensions: dict[str, JsonValue]


@dataclass(slots=True, frozen=True)
class ProblemDetailsParams:
    """Parameters used to construct a Problem Details payload."""

    problem_type: str
    title: str
    status: int
    detail: str
    instance: str
    code: str | None = None
    extensions: Mapping[str, JsonValue] | None = None


class ProblemDetailsValidationError(Exception):
    """Raised when a Problem Details payload fails schema validation.

    Parameters
    ----------
    message : str
        Human-readable description of the failure.
    validation_errors : list[str] | None, optional
        Individual constraint violations reported by the validator.
    """

    def __init__(self, message: str, validation_errors: list[str] | None = None) -> None:
        super().__init__(message)
        self.validation_errors = validation_errors or []


def validate_problem_details(payload: Mapping[str, object]) -> None:
    """Validate ``payload`` against :data:`PROBLEM_DETAILS_SCHEMA`.

    Parameters
    ----------
    payload : Mapping[str, object]
        Candidate Problem Details payload.

    Raises
    ------
    ProblemDetailsValidationError
        If the payload violates the schema.
    """
    try:
        _VALIDATOR.validate(dict(payload))
    except ValidationError as exc:
        errors = [exc.message]
        if exc.absolute_path:
            errors.append("at path: " + ".".join(str(part) for part in exc.absolute_path))
        msg = f"Problem Details validation failed: {'; '.join(errors)}"
        raise ProblemDetailsValidationError(msg, validation_errors=errors) from exc


def build_problem_details(params: ProblemDetailsParams, /) -> ProblemDetails:
    """Build and validate an RFC 9457 Problem Details payload.

    Parameters
    ----------
    params : ProblemDetailsParams
        Payload fields.

    Returns
    -------
    ProblemDetails
        Validated payload. ``code`` and ``extensions`` are present only when
        supplied.
    """
    payload: dict[str, object] = {
        "type": params.problem_type,
        "title": params.title,
        "status": params.status,
        "detail": params.detail,
        "instance": params.instance,
    }
    if params.code is not None:
        payload["code"] = params.code
    if params.extensions:
        payload["extensions"] = dict(params.extensions)
    validate_problem_details(payload)
    return cast("ProblemDetails", payload)


def render_problem(problem: ProblemDetails | Mapping[str, object], *, indent: int | None = None) -> str:
    """Serialise ``problem`` to JSON without escaping non-ASCII characters."""
    return json.dumps(problem, default=str, ensure_ascii=False, indent=indent)
