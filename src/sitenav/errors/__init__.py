"""Exception hierarchy and Problem Details support.

Examples
--------
>>> from sitenav.errors import ErrorCode, SiteNavError
>>> error = SiteNavError("Build failed", code=ErrorCode.CONFIGURATION_ERROR)
>>> error.to_problem_details()["type"]
'https://sitenav.dev/problems/configuration-error'
"""

from __future__ import annotations

from sitenav.errors.codes import BASE_TYPE_URI, ErrorCode, get_type_uri
from sitenav.errors.exceptions import (
    ConfigLoadError,
    ContentRootError,
    DuplicateSlugError,
    DuplicateSocialKeyError,
    EmptyDirectoryError,
    EmptyGroupError,
    FrontMatterError,
    InvalidDeclarationError,
    InvalidLogoShapeError,
    MissingRequiredFieldError,
    OutputWriteError,
    SettingsError,
    SiteNavError,
    UnknownSlugError,
)

__all__ = [
    "BASE_TYPE_URI",
    "ConfigLoadError",
    "ContentRootError",
    "DuplicateSlugError",
    "DuplicateSocialKeyError",
    "EmptyDirectoryError",
    "EmptyGroupError",
    "ErrorCode",
    "FrontMatterError",
    "InvalidDeclarationError",
    "InvalidLogoShapeError",
    "MissingRequiredFieldError",
    "OutputWriteError",
    "SettingsError",
    "SiteNavError",
    "UnknownSlugError",
    "get_type_uri",
]
