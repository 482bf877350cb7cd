"""Resolver settings with typed configuration and fail-fast validation.

Settings come from ``SITENAV_*`` environment variables and keyword
overrides. Validation failures surface as :class:`~sitenav.errors.SettingsError`
so the build reports them like any other resolver error.

Examples
--------
>>> from sitenav.settings import load_settings
>>> settings = load_settings(max_workers=2)
>>> settings.content_extensions
('.md', '.mdx', '.markdown')
"""

from __future__ import annotations

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from sitenav.errors import SettingsError
from sitenav.logging import get_logger

__all__ = [
    "ResolverSettings",
    "load_settings",
]

logger = get_logger(__name__)

_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})


class ResolverSettings(BaseSettings):
    """Runtime configuration for a resolver build (``SITENAV_*`` namespace)."""

    model_config = SettingsConfigDict(
        env_prefix="SITENAV_",
        extra="forbid",
        case_sensitive=False,
        frozen=True,
    )

    content_extensions: tuple[str, ...] = Field(
        default=(".md", ".mdx", ".markdown"),
        description="File suffixes treated as content pages",
    )
    max_workers: int = Field(
        default=4, ge=1, le=64, description="Threads used to scan content subdirectories"
    )
    strict_empty_directories: bool = Field(
        default=False,
        description="Fail the build when an autogenerate directive matches no content",
    )
    log_level: str = Field(default="INFO", description="Logging level for the CLI")
    log_json: bool = Field(default=True, description="Emit JSON log lines from the CLI")

    @field_validator("content_extensions")
    @classmethod
    def _normalise_extensions(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        if not value:
            msg = "at least one content extension is required"
            raise ValueError(msg)
        normalised = []
        for suffix in value:
            cleaned = suffix.strip().lower()
            if not cleaned:
                msg = "content extensions must be non-empty"
                raise ValueError(msg)
            normalised.append(cleaned if cleaned.startswith(".") else f".{cleaned}")
        return tuple(dict.fromkeys(normalised))

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in _LOG_LEVELS:
            msg = f"log_level must be one of {sorted(_LOG_LEVELS)}"
            raise ValueError(msg)
        return level


def load_settings(**overrides: object) -> ResolverSettings:
    """Load :class:`ResolverSettings` with optional keyword overrides.

    Raises
    ------
    SettingsError
        If the environment or overrides fail validation.
    """
    try:
        return ResolverSettings(**overrides)  # type: ignore[arg-type]
    except ValidationError as exc:
        msg = f"Configuration validation failed: {exc}"
        logger.exception(
            "Settings validation failed",
            extra={"operation": "settings", "error_type": type(exc).__name__},
        )
        raise SettingsError(
            msg,
            cause=exc,
            context={"validation_error": str(exc)},
        ) from exc
