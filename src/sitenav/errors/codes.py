"""Error code registry and type URIs for Problem Details.

Codes are kebab-case and stable: build tooling matches on them, so a code is
never renamed once released.

Examples
--------
>>> from sitenav.errors.codes import ErrorCode, get_type_uri
>>> get_type_uri(ErrorCode.UNKNOWN_SLUG)
'https://sitenav.dev/problems/unknown-slug'
"""

from __future__ import annotations

from enum import StrEnum
from typing import Final

__all__ = [
    "BASE_TYPE_URI",
    "ErrorCode",
    "get_type_uri",
]

BASE_TYPE_URI: Final[str] = "https://sitenav.dev/problems"


class ErrorCode(StrEnum):
    """Stable error codes for resolver exceptions.

    Codes are grouped by the pipeline stage that raises them:

    - Configuration: ``missing-required-field``, ``duplicate-social-key``,
      ``empty-group``, ``invalid-logo-shape``, ``invalid-declaration``,
      ``config-load-failed``, ``configuration-error``
    - Content index: ``duplicate-slug``, ``front-matter-invalid``,
      ``content-root-invalid``
    - Resolution: ``unknown-slug``, ``empty-directory``
    - Output: ``output-write-failed``
    """

    # Configuration
    MISSING_REQUIRED_FIELD = "missing-required-field"
    DUPLICATE_SOCIAL_KEY = "duplicate-social-key"
    EMPTY_GROUP = "empty-group"
    INVALID_LOGO_SHAPE = "invalid-logo-shape"
    INVALID_DECLARATION = "invalid-declaration"
    CONFIG_LOAD_FAILED = "config-load-failed"
    CONFIGURATION_ERROR = "configuration-error"

    # Content index
    DUPLICATE_SLUG = "duplicate-slug"
    FRONT_MATTER_INVALID = "front-matter-invalid"
    CONTENT_ROOT_INVALID = "content-root-invalid"

    # Resolution
    UNKNOWN_SLUG = "unknown-slug"
    EMPTY_DIRECTORY = "empty-directory"

    # Output
    OUTPUT_WRITE_FAILED = "output-write-failed"

    def __str__(self) -> str:
        return self.value


def get_type_uri(code: ErrorCode) -> str:
    """Return the RFC 9457 type URI for ``code``."""
    return f"{BASE_TYPE_URI}/{code.value}"
