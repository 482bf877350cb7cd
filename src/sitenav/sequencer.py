"""Derive previous/next links and breadcrumbs from a resolved tree."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sitenav.models import ResolvedGroup, ResolvedLink, SequencedPage

if TYPE_CHECKING:
    from collections.abc import Iterator, Mapping, Sequence

    from sitenav.models import ResolvedNavigationTree, ResolvedNode

__all__ = ["pages_by_slug", "sequence_pages"]


def _walk(
    nodes: Sequence[ResolvedNode], breadcrumb: tuple[str, ...]
) -> Iterator[tuple[ResolvedLink, tuple[str, ...]]]:
    for node in nodes:
        match node:
            case ResolvedLink():
                yield node, breadcrumb
            case ResolvedGroup(label=label, children=children):
                yield from _walk(children, (*breadcrumb, label))


def sequence_pages(tree: ResolvedNavigationTree) -> tuple[SequencedPage, ...]:
    """Flatten ``tree`` into pages with neighbours and breadcrumbs.

    Leaves are visited depth-first in declared order. The first page has no
    ``previous`` and the last has no ``next``.

    Examples
    --------
    >>> from sitenav.models import ResolvedNavigationTree
    >>> tree = ResolvedNavigationTree(
    ...     nodes=(ResolvedGroup("Intro", (ResolvedLink("Start", "intro/start", "Start"),)),)
    ... )
    >>> page = sequence_pages(tree)[0]
    >>> (page.previous, page.next, page.breadcrumb)
    (None, None, ('Intro',))
    """
    leaves = list(_walk(tree.nodes, ()))
    last = len(leaves) - 1
    return tuple(
        SequencedPage(
            slug=link.slug,
            label=link.label,
            position=position,
            previous=leaves[position - 1][0].slug if position > 0 else None,
            next=leaves[position + 1][0].slug if position < last else None,
            breadcrumb=breadcrumb,
        )
        for position, (link, breadcrumb) in enumerate(leaves)
    )


def pages_by_slug(pages: Sequence[SequencedPage]) -> Mapping[str, SequencedPage]:
    """Index sequenced pages by slug; the first occurrence of a slug wins."""
    lookup: dict[str, SequencedPage] = {}
    for page in pages:
        lookup.setdefault(page.slug, page)
    return lookup
