"""Front-matter extraction for content pages.

Only the YAML block between leading ``---`` fences is read; the page body is
left to the rendering pipeline.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Final

import yaml

from sitenav.errors import FrontMatterError

if TYPE_CHECKING:
    from pathlib import Path

__all__ = [
    "FrontMatter",
    "parse_front_matter",
    "read_front_matter",
]

_FENCE_RE: Final = re.compile(r"\A\ufeff?---[ \t]*\r?\n(.*?)(?:\r?\n)?^---[ \t]*$", re.DOTALL | re.MULTILINE)


@dataclass(slots=True, frozen=True)
class FrontMatter:
    """Navigation-relevant front-matter fields of one page."""

    title: str | None = None
    slug: str | None = None
    order: int | float | None = None
    label: str | None = None
    hidden: bool = False


def _optional_str(data: dict[str, object], key: str, *, source: str) -> str | None:
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        msg = f"'{key}' must be a string"
        raise FrontMatterError(msg, source=source)
    stripped = value.strip()
    return stripped or None


def _order_hint(value: object, *, source: str) -> int | float | None:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        msg = "sidebar order must be a number"
        raise FrontMatterError(msg, source=source)
    if isinstance(value, float) and not math.isfinite(value):
        msg = "sidebar order must be a finite number"
        raise FrontMatterError(msg, source=source)
    return value


def parse_front_matter(text: str, *, source: str) -> FrontMatter:
    """Parse the front-matter block at the top of ``text``.

    Both the Starlight layout (``sidebar: {order, label, hidden}``) and a
    top-level ``order`` are understood; ``sidebar.order`` wins when both are
    present.

    Parameters
    ----------
    text : str
        Full page source.
    source : str
        Page path used in error messages.

    Returns
    -------
    FrontMatter
        Parsed fields; all defaults when the page has no front-matter.

    Raises
    ------
    FrontMatterError
        If the block is not valid YAML, is not a mapping, or a field has the
        wrong type.
    """
    match = _FENCE_RE.match(text)
    if match is None:
        return FrontMatter()
    try:
        loaded = yaml.safe_load(match.group(1))
    except yaml.YAMLError as exc:
        msg = "front-matter is not valid YAML"
        raise FrontMatterError(msg, source=source, cause=exc) from exc
    if loaded is None:
        return FrontMatter()
    if not isinstance(loaded, dict):
        msg = "front-matter must be a mapping"
        raise FrontMatterError(msg, source=source)

    sidebar = loaded.get("sidebar") or {}
    if not isinstance(sidebar, dict):
        msg = "'sidebar' must be a mapping"
        raise FrontMatterError(msg, source=source)

    order = _order_hint(sidebar.get("order"), source=source)
    if order is None:
        order = _order_hint(loaded.get("order"), source=source)

    hidden = sidebar.get("hidden", False)
    if not isinstance(hidden, bool):
        msg = "'sidebar.hidden' must be a boolean"
        raise FrontMatterError(msg, source=source)

    return FrontMatter(
        title=_optional_str(loaded, "title", source=source),
        slug=_optional_str(loaded, "slug", source=source),
        order=order,
        label=_optional_str(sidebar, "label", source=source),
        hidden=hidden,
    )


def read_front_matter(path: Path, *, source: str) -> FrontMatter:
    """Read ``path`` and parse its front-matter.

    Raises
    ------
    FrontMatterError
        If the file cannot be read or decoded as UTF-8, or the block is
        malformed.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        msg = "file is not valid UTF-8"
        raise FrontMatterError(msg, source=source, cause=exc) from exc
    except OSError as exc:
        msg = f"file cannot be read ({exc.strerror or type(exc).__name__})"
        raise FrontMatterError(msg, source=source, cause=exc) from exc
    return parse_front_matter(text, source=source)
