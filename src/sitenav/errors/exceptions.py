"""Typed exception hierarchy with Problem Details support.

All resolver exceptions inherit from :class:`SiteNavError`, which carries an
:class:`~sitenav.errors.codes.ErrorCode`, an HTTP-style status, a log level
and a context mapping naming the offending field, slug or directory. Any
error converts to an RFC 9457 payload with :meth:`SiteNavError.to_problem_details`.

Examples
--------
>>> from sitenav.errors import UnknownSlugError, ErrorCode
>>> try:
...     raise UnknownSlugError("missing/page", path="sidebar[0].items[0]")
... except UnknownSlugError as exc:
...     assert exc.code == ErrorCode.UNKNOWN_SLUG
...     details = exc.to_problem_details()
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, cast

from sitenav.errors.codes import ErrorCode, get_type_uri
from sitenav.problem_details import ProblemDetailsParams, build_problem_details

if TYPE_CHECKING:
    from collections.abc import Mapping

    from sitenav.problem_details import JsonValue, ProblemDetails

__all__ = [
    "ConfigLoadError",
    "ContentRootError",
    "DuplicateSlugError",
    "DuplicateSocialKeyError",
    "EmptyDirectoryError",
    "EmptyGroupError",
    "FrontMatterError",
    "InvalidDeclarationError",
    "InvalidLogoShapeError",
    "MissingRequiredFieldError",
    "OutputWriteError",
    "SettingsError",
    "SiteNavError",
    "UnknownSlugError",
]


class SiteNavError(Exception):
    """Base exception for all resolver errors.

    Parameters
    ----------
    message : str
        Human-readable error message.
    code : ErrorCode, optional
        Stable error code. Defaults to ``ErrorCode.CONFIGURATION_ERROR``.
    http_status : int, optional
        Status used in Problem Details payloads. Defaults to 500.
    log_level : int, optional
        Level at which the error should be logged. Defaults to ``logging.ERROR``.
    cause : Exception | None, optional
        Underlying exception, chained as ``__cause__``.
    context : Mapping[str, object] | None, optional
        Structured details about the failure (field, slug, path, ...).

    Attributes
    ----------
    message : str
        Human-readable error message.
    code : ErrorCode
        Error code enum value.
    http_status : int
        Status for Problem Details payloads.
    log_level : int
        Logging level for the error.
    context : dict[str, object]
        Additional error details.
    """

    def __init__(
        self,
        message: str,
        *,
        code: ErrorCode = ErrorCode.CONFIGURATION_ERROR,
        http_status: int = 500,
        log_level: int = logging.ERROR,
        cause: Exception | None = None,
        context: Mapping[str, object] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.http_status = http_status
        self.log_level = log_level
        self.context: dict[str, object] = dict(context) if context else {}
        if cause is not None:
            self.__cause__ = cause

    def to_problem_details(
        self,
        instance: str | None = None,
        title: str | None = None,
    ) -> ProblemDetails:
        """Convert the error to an RFC 9457 Problem Details payload.

        Parameters
        ----------
        instance : str | None, optional
            URI identifying this occurrence. Defaults to a URN built from the
            declaration path when the error carries one.
        title : str | None, optional
            Short summary. Defaults to the exception class name.

        Returns
        -------
        ProblemDetails
            Validated payload whose ``extensions`` hold the error context.
        """
        if instance is None:
            path = self.context.get("path")
            instance = f"urn:sitenav:{path}" if path else "urn:sitenav:error"
        return build_problem_details(
            ProblemDetailsParams(
                problem_type=get_type_uri(self.code),
                title=title or self.__class__.__name__,
                status=self.http_status,
                detail=self.message,
                instance=instance,
                code=self.code.value,
                extensions=cast("Mapping[str, JsonValue] | None", self.context or None),
            )
        )

    def __str__(self) -> str:
        base = f"{self.__class__.__name__}[{self.code.value}]: {self.message}"
        if self.__cause__:
            base += f" (caused by: {type(self.__cause__).__name__})"
        return base


def _with_path(context: dict[str, object], path: str | None) -> dict[str, object]:
    if path is not None:
        context["path"] = path
    return context


class MissingRequiredFieldError(SiteNavError):
    """A required configuration field is absent or blank.

    Parameters
    ----------
    field : str
        Name of the missing field.
    path : str | None, optional
        Location in the configuration, e.g. ``sidebar[2]``.
    """

    def __init__(self, field: str, *, path: str | None = None) -> None:
        where = f" at {path}" if path else ""
        super().__init__(
            f"Required field '{field}' is missing or empty{where}",
            code=ErrorCode.MISSING_REQUIRED_FIELD,
            http_status=422,
            context=_with_path({"field": field}, path),
        )
        self.field = field
        self.path = path


class DuplicateSocialKeyError(SiteNavError):
    """Two social links share the same platform key."""

    def __init__(self, platform: str, *, path: str | None = "social") -> None:
        super().__init__(
            f"Social platform '{platform}' is declared more than once",
            code=ErrorCode.DUPLICATE_SOCIAL_KEY,
            http_status=422,
            context=_with_path({"platform": platform}, path),
        )
        self.platform = platform


class EmptyGroupError(SiteNavError):
    """A sidebar group was declared with no items."""

    def __init__(self, label: str, *, path: str | None = None) -> None:
        super().__init__(
            f"Sidebar group '{label}' has no items",
            code=ErrorCode.EMPTY_GROUP,
            http_status=422,
            context=_with_path({"label": label}, path),
        )
        self.label = label


class InvalidLogoShapeError(SiteNavError):
    """The logo is neither a single path nor a complete light/dark pair."""

    def __init__(self, reason: str, *, path: str | None = "logo") -> None:
        super().__init__(
            f"Invalid logo: {reason}",
            code=ErrorCode.INVALID_LOGO_SHAPE,
            http_status=422,
            context=_with_path({"reason": reason}, path),
        )


class InvalidDeclarationError(SiteNavError):
    """Configuration input has an unrecognisable structure."""

    def __init__(self, reason: str, *, path: str | None = None) -> None:
        where = f" at {path}" if path else ""
        super().__init__(
            f"Invalid navigation declaration{where}: {reason}",
            code=ErrorCode.INVALID_DECLARATION,
            http_status=422,
            context=_with_path({"reason": reason}, path),
        )


class ConfigLoadError(SiteNavError):
    """A configuration file could not be read or parsed."""

    def __init__(self, message: str, *, source: str, cause: Exception | None = None) -> None:
        super().__init__(
            message,
            code=ErrorCode.CONFIG_LOAD_FAILED,
            http_status=400,
            cause=cause,
            context={"source": source},
        )


class SettingsError(SiteNavError):
    """Resolver settings failed validation."""

    def __init__(
        self,
        message: str,
        *,
        cause: Exception | None = None,
        context: Mapping[str, object] | None = None,
    ) -> None:
        super().__init__(
            message,
            code=ErrorCode.CONFIGURATION_ERROR,
            http_status=500,
            cause=cause,
            context=context,
        )


class DuplicateSlugError(SiteNavError):
    """Two content files resolve to the same slug."""

    def __init__(self, slug: str, *, sources: tuple[str, str]) -> None:
        super().__init__(
            f"Slug '{slug}' is produced by both '{sources[0]}' and '{sources[1]}'",
            code=ErrorCode.DUPLICATE_SLUG,
            http_status=409,
            context={"slug": slug, "sources": list(sources)},
        )
        self.slug = slug
        self.sources = sources


class FrontMatterError(SiteNavError):
    """A content file carries malformed front-matter."""

    def __init__(self, reason: str, *, source: str, cause: Exception | None = None) -> None:
        super().__init__(
            f"Invalid front-matter in '{source}': {reason}",
            code=ErrorCode.FRONT_MATTER_INVALID,
            http_status=422,
            cause=cause,
            context={"source": source, "reason": reason},
        )
        self.source = source


class ContentRootError(SiteNavError):
    """The content root does not exist or is not a directory."""

    def __init__(self, root: str) -> None:
        super().__init__(
            f"Content root '{root}' is not a directory",
            code=ErrorCode.CONTENT_ROOT_INVALID,
            http_status=400,
            context={"root": root},
        )


class UnknownSlugError(SiteNavError):
    """A sidebar link references a slug with no content entry."""

    def __init__(self, slug: str, *, path: str | None = None) -> None:
        where = f" at {path}" if path else ""
        super().__init__(
            f"Sidebar link{where} references unknown slug '{slug}'",
            code=ErrorCode.UNKNOWN_SLUG,
            http_status=404,
            context=_with_path({"slug": slug}, path),
        )
        self.slug = slug
        self.path = path


class EmptyDirectoryError(SiteNavError):
    """An autogenerate directive matched no content.

    Logged at WARNING and collected on the resolved tree; only raised when
    strict empty-directory checking is enabled.
    """

    def __init__(self, directory: str, *, label: str, path: str | None = None) -> None:
        super().__init__(
            f"Autogenerate directive '{label}' matched no content under '{directory or '.'}'",
            code=ErrorCode.EMPTY_DIRECTORY,
            http_status=422,
            log_level=logging.WARNING,
            context=_with_path({"directory": directory, "label": label}, path),
        )
        self.directory = directory
        self.label = label


class OutputWriteError(SiteNavError):
    """The navigation document could not be written."""

    def __init__(self, target: str, *, cause: Exception | None = None) -> None:
        super().__init__(
            f"Cannot write navigation document to '{target}'",
            code=ErrorCode.OUTPUT_WRITE_FAILED,
            http_status=500,
            cause=cause,
            context={"target": target},
        )
