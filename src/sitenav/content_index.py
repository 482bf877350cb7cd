"""Content index: scan a content tree into slug-keyed :class:`ContentEntry` values.

Slugs derive from file paths (``guide/Getting Started.md`` →
``guide/getting-started``; ``guide/index.md`` → ``guide``) unless the page's
front-matter declares its own ``slug``. Top-level subdirectories are scanned
concurrently; the resulting entries are sorted before the index is assembled,
so discovery order never reaches the output.
"""

from __future__ import annotations

import re
import unicodedata
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path, PurePosixPath
from typing import TYPE_CHECKING, Final

from sitenav.errors import ContentRootError, FrontMatterError
from sitenav.frontmatter import read_front_matter
from sitenav.logging import get_logger, with_fields
from sitenav.models import ContentEntry, ContentIndex
from sitenav.settings import ResolverSettings

if TYPE_CHECKING:
    from collections.abc import Iterable

__all__ = [
    "build_content_index",
    "derive_slug",
    "derive_title",
    "normalise_slug",
]

LOGGER = get_logger(__name__)

INDEX_STEM: Final[str] = "index"

_WHITESPACE_RE: Final = re.compile(r"\s+")
_UNSAFE_RE: Final = re.compile(r"[^a-z0-9._-]")
_SEPARATOR_RE: Final = re.compile(r"[-_\s]+")


def _slugify_segment(segment: str) -> str:
    folded = unicodedata.normalize("NFKD", segment).encode("ascii", "ignore").decode("ascii")
    lowered = _WHITESPACE_RE.sub("-", folded.strip().lower())
    return _UNSAFE_RE.sub("", lowered)


def normalise_slug(slug: str) -> str:
    """Strip surrounding slashes and empty segments from a user-supplied slug."""
    return "/".join(part for part in slug.strip().split("/") if part and part != ".")


def derive_slug(relative: PurePosixPath) -> str:
    """Return the slug for a content file at ``relative`` (suffix included).

    Examples
    --------
    >>> derive_slug(PurePosixPath("Guide/Getting Started.md"))
    'guide/getting-started'
    >>> derive_slug(PurePosixPath("reference/index.mdx"))
    'reference'
    >>> derive_slug(PurePosixPath("index.md"))
    'index'
    >>> derive_slug(PurePosixPath("Café/Résumé.md"))
    'cafe/resume'

    Segments left empty once unsafe characters are dropped are skipped; the
    result is ``""`` when nothing remains.
    """
    segments = [segment for part in relative.with_suffix("").parts if (segment := _slugify_segment(part))]
    if len(segments) > 1 and segments[-1] == INDEX_STEM:
        segments.pop()
    return "/".join(segments)


def derive_title(relative: PurePosixPath) -> str:
    """Return a human title from a file name.

    ``index`` files take their directory's name.

    Examples
    --------
    >>> derive_title(PurePosixPath("intro/getting_started.md"))
    'Getting started'
    """
    name = relative.stem
    if name.lower() == INDEX_STEM and len(relative.parts) > 1:
        name = relative.parts[-2]
    words = _SEPARATOR_RE.sub(" ", name).strip()
    if not words:
        return name
    return words[0].upper() + words[1:]


def _is_visible(path: Path, root: Path) -> bool:
    return not any(part.startswith(".") for part in path.relative_to(root).parts)


def _content_files(base: Path, root: Path, extensions: frozenset[str], *, recursive: bool) -> list[Path]:
    candidates = base.rglob("*") if recursive else base.iterdir()
    return sorted(
        path
        for path in candidates
        if path.is_file() and path.suffix.lower() in extensions and _is_visible(path, root)
    )


def _load_entry(path: Path, root: Path) -> ContentEntry:
    relative = PurePosixPath(path.relative_to(root).as_posix())
    source = relative.as_posix()
    front_matter = read_front_matter(path, source=source)
    slug = normalise_slug(front_matter.slug) if front_matter.slug else derive_slug(relative)
    if not slug:
        msg = "no slug can be derived from the file name; set 'slug' explicitly"
        raise FrontMatterError(msg, source=source)
    directory = relative.parent.as_posix()
    return ContentEntry(
        slug=slug,
        title=front_matter.title or derive_title(relative),
        directory="" if directory == "." else directory,
        order=front_matter.order,
        source=source,
        label=front_matter.label,
        hidden=front_matter.hidden,
    )


def _scan(paths: Iterable[Path], root: Path) -> list[ContentEntry]:
    return [_load_entry(path, root) for path in paths]


def _scan_subdirectory(directory: Path, root: Path, extensions: frozenset[str]) -> list[ContentEntry]:
    return _scan(_content_files(directory, root, extensions, recursive=True), root)


def build_content_index(root: Path | str, *, settings: ResolverSettings | None = None) -> ContentIndex:
    """Scan ``root`` and return the content index.

    Parameters
    ----------
    root : Path | str
        Content root directory.
    settings : ResolverSettings | None, optional
        Extensions and worker count. Defaults to :class:`ResolverSettings`
        loaded from the environment.

    Returns
    -------
    ContentIndex
        One entry per content file.

    Raises
    ------
    ContentRootError
        If ``root`` is not a directory.
    DuplicateSlugError
        If two files resolve to the same slug.
    FrontMatterError
        If a page carries malformed front-matter.
    """
    resolved_settings = settings or ResolverSettings()
    root_path = Path(root)
    if not root_path.is_dir():
        raise ContentRootError(str(root_path))
    extensions = frozenset(resolved_settings.content_extensions)
    logger = with_fields(LOGGER, operation="content_index", root=str(root_path))

    entries = _scan(_content_files(root_path, root_path, extensions, recursive=False), root_path)
    subdirectories = sorted(
        path for path in root_path.iterdir() if path.is_dir() and not path.name.startswith(".")
    )
    if subdirectories:
        workers = min(resolved_settings.max_workers, len(subdirectories))
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="sitenav-index") as pool:
            futures = [
                pool.submit(_scan_subdirectory, directory, root_path, extensions)
                for directory in subdirectories
            ]
            for future in futures:
                entries.extend(future.result())

    index = ContentIndex.from_entries(entries)
    logger.info("Content index built", extra={"entry_count": len(index)})
    return index
