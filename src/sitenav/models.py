"""Typed models for navigation declarations, content and resolved trees.

Declarations and resolved nodes are tagged unions of frozen dataclasses;
pipeline stages dispatch on them with ``match``. All sequences are tuples,
so a resolved tree cannot be mutated once built.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from sitenav.errors import DuplicateSlugError

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from sitenav.errors import SiteNavError

__all__ = [
    "AutogenerateDeclaration",
    "ContentEntry",
    "ContentIndex",
    "DeclarationNode",
    "GroupDeclaration",
    "LinkDeclaration",
    "Logo",
    "NavigationDeclaration",
    "ResolvedGroup",
    "ResolvedLink",
    "ResolvedNavigationTree",
    "ResolvedNode",
    "SequencedPage",
    "SocialLink",
]


@dataclass(slots=True, frozen=True)
class Logo:
    """Site logo: a single ``src`` path or a ``light``/``dark`` pair."""

    src: str | None = None
    light: str | None = None
    dark: str | None = None
    alt: str = ""
    replaces_title: bool = False

    @property
    def is_themed(self) -> bool:
        """Return True when the logo is a light/dark pair."""
        return self.src is None


@dataclass(slots=True, frozen=True)
class SocialLink:
    """One social link; ``platform`` is unique within a declaration."""

    platform: str
    url: str
    label: str | None = None


@dataclass(slots=True, frozen=True)
class LinkDeclaration:
    """Sidebar leaf pointing at one content page.

    A ``None`` label is filled from the content entry's title at resolution.
    """

    slug: str
    label: str | None = None


@dataclass(slots=True, frozen=True)
class GroupDeclaration:
    """Nested sidebar section whose children keep their declared order."""

    label: str
    children: tuple[DeclarationNode, ...]
    collapsed: bool = False


@dataclass(slots=True, frozen=True)
class AutogenerateDeclaration:
    """Placeholder expanded into one link per page under ``directory``."""

    label: str
    directory: str
    collapsed: bool = False


type DeclarationNode = LinkDeclaration | GroupDeclaration | AutogenerateDeclaration


@dataclass(slots=True, frozen=True)
class NavigationDeclaration:
    """Validated site navigation configuration."""

    title: str
    sidebar: tuple[DeclarationNode, ...]
    base_url: str | None = None
    logo: Logo | None = None
    social: tuple[SocialLink, ...] = ()


@dataclass(slots=True, frozen=True)
class ContentEntry:
    """One content page discovered in the content tree.

    Attributes
    ----------
    slug : str
        Unique, path-like page identifier.
    title : str
        Front-matter title, or one derived from the file name.
    directory : str
        POSIX directory of the source file relative to the content root;
        ``""`` for files at the root.
    order : int | float | None
        Explicit sidebar ordering hint.
    source : str
        Source path relative to the content root.
    label : str | None
        Sidebar label override from front-matter.
    hidden : bool
        Excluded from autogenerated sections when True.
    """

    slug: str
    title: str
    directory: str = ""
    order: int | float | None = None
    source: str = ""
    label: str | None = None
    hidden: bool = False

    @property
    def sidebar_label(self) -> str:
        """Label used when the page appears in an autogenerated section."""
        return self.label or self.title


class ContentIndex:
    """Slug-keyed, read-only collection of :class:`ContentEntry`.

    Uniqueness is enforced at construction: the first two entries sharing a
    slug raise :class:`~sitenav.errors.DuplicateSlugError`. Iteration yields
    entries sorted by slug.

    Examples
    --------
    >>> index = ContentIndex.from_entries([ContentEntry(slug="intro/start", title="Start")])
    >>> "intro/start" in index
    True
    """

    __slots__ = ("_entries",)

    def __init__(self, entries: dict[str, ContentEntry]) -> None:
        self._entries = dict(sorted(entries.items()))

    @classmethod
    def from_entries(cls, entries: Iterable[ContentEntry]) -> ContentIndex:
        """Build an index, rejecting duplicate slugs.

        Parameters
        ----------
        entries : Iterable[ContentEntry]
            Entries to index, in any order.

        Returns
        -------
        ContentIndex
            Index keyed by slug.

        Raises
        ------
        DuplicateSlugError
            If two entries share a slug. The sources are reported in sorted
            order so the message does not depend on discovery order.
        """
        by_slug: dict[str, ContentEntry] = {}
        for entry in sorted(entries, key=lambda item: (item.slug, item.source)):
            existing = by_slug.get(entry.slug)
            if existing is not None:
                raise DuplicateSlugError(entry.slug, sources=(existing.source, entry.source))
            by_slug[entry.slug] = entry
        return cls(by_slug)

    def get(self, slug: str) -> ContentEntry | None:
        """Return the entry for ``slug`` or None."""
        return self._entries.get(slug)

    def __getitem__(self, slug: str) -> ContentEntry:
        return self._entries[slug]

    def __contains__(self, slug: object) -> bool:
        return slug in self._entries

    def __iter__(self) -> Iterator[ContentEntry]:
        return iter(self._entries.values())

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def slugs(self) -> tuple[str, ...]:
        """All slugs in sorted order."""
        return tuple(self._entries)

    def in_directory(self, directory: str) -> tuple[ContentEntry, ...]:
        """Return entries located in ``directory`` or any of its subdirectories.

        ``""`` selects the whole tree.
        """
        if not directory:
            return tuple(self._entries.values())
        prefix = f"{directory}/"
        return tuple(
            entry
            for entry in self._entries.values()
            if entry.directory == directory or entry.directory.startswith(prefix)
        )


@dataclass(slots=True, frozen=True)
class ResolvedLink:
    """Sidebar leaf validated against the content index."""

    label: str
    slug: str
    title: str


@dataclass(slots=True, frozen=True)
class ResolvedGroup:
    """Resolved sidebar section; may be empty."""

    label: str
    children: tuple[ResolvedNode, ...]
    collapsed: bool = False


type ResolvedNode = ResolvedLink | ResolvedGroup


@dataclass(slots=True, frozen=True)
class ResolvedNavigationTree:
    """Site navigation for one build, plus non-fatal diagnostics."""

    nodes: tuple[ResolvedNode, ...]
    warnings: tuple[SiteNavError, ...] = field(default=(), compare=False)

    def links(self) -> Iterator[ResolvedLink]:
        """Yield every link depth-first in declared order."""
        stack: list[ResolvedNode] = list(reversed(self.nodes))
        while stack:
            node = stack.pop()
            match node:
                case ResolvedLink():
                    yield node
                case ResolvedGroup(children=children):
                    stack.extend(reversed(children))


@dataclass(slots=True, frozen=True)
class SequencedPage:
    """Pagination and breadcrumb metadata for one leaf page."""

    slug: str
    label: str
    position: int
    previous: str | None
    next: str | None
    breadcrumb: tuple[str, ...] = ()
