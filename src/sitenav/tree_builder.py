"""Resolve a validated declaration against the content index.

The builder walks the declaration depth-first and keeps declared order.
Links are checked against the index, groups are resolved recursively, and
each autogenerate directive becomes a group holding its expansion at the
directive's position. Groups left without children are kept.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from sitenav.autogenerate import expand_autogenerate
from sitenav.errors import UnknownSlugError
from sitenav.logging import get_logger
from sitenav.models import (
    AutogenerateDeclaration,
    GroupDeclaration,
    LinkDeclaration,
    ResolvedGroup,
    ResolvedLink,
    ResolvedNavigationTree,
)

if TYPE_CHECKING:
    from sitenav.errors import SiteNavError
    from sitenav.models import (
        ContentIndex,
        DeclarationNode,
        NavigationDeclaration,
        ResolvedNode,
    )

__all__ = ["build_tree", "resolve_node"]

LOGGER = get_logger(__name__)


def resolve_node(
    node: DeclarationNode,
    index: ContentIndex,
    *,
    path: str,
    warnings: list[SiteNavError],
    strict: bool = False,
) -> ResolvedNode:
    """Resolve one declaration node and its descendants.

    Raises
    ------
    UnknownSlugError
        If a link in the subtree references a slug missing from ``index``.
    EmptyDirectoryError
        If ``strict`` is set and an autogenerate directive matches nothing.
    """
    match node:
        case LinkDeclaration(slug=slug, label=label):
            entry = index.get(slug)
            if entry is None:
                raise UnknownSlugError(slug, path=path)
            return ResolvedLink(label=label or entry.title, slug=entry.slug, title=entry.title)
        case GroupDeclaration(label=label, children=children, collapsed=collapsed):
            return ResolvedGroup(
                label=label,
                children=tuple(
                    resolve_node(
                        child,
                        index,
                        path=f"{path}.items[{position}]",
                        warnings=warnings,
                        strict=strict,
                    )
                    for position, child in enumerate(children)
                ),
                collapsed=collapsed,
            )
        case AutogenerateDeclaration(label=label, collapsed=collapsed):
            links = expand_autogenerate(node, index, warnings=warnings, strict=strict, path=path)
            return ResolvedGroup(label=label, children=links, collapsed=collapsed)
        case _:
            msg = f"Unsupported declaration node: {type(node).__name__}"
            raise TypeError(msg)


def build_tree(
    declaration: NavigationDeclaration,
    index: ContentIndex,
    *,
    strict: bool = False,
) -> ResolvedNavigationTree:
    """Build the resolved navigation tree for one build.

    Parameters
    ----------
    declaration : NavigationDeclaration
        Validated configuration.
    index : ContentIndex
        Content index of the same build.
    strict : bool, optional
        Treat empty autogenerate directories as errors. Defaults to False.

    Returns
    -------
    ResolvedNavigationTree
        Tree mirroring the declaration's order, with collected warnings.

    Raises
    ------
    UnknownSlugError
        If any link references a slug missing from ``index``.
    EmptyDirectoryError
        If ``strict`` is set and an autogenerate directive matches nothing.
    """
    warnings: list[SiteNavError] = []
    nodes = tuple(
        resolve_node(node, index, path=f"sidebar[{position}]", warnings=warnings, strict=strict)
        for position, node in enumerate(declaration.sidebar)
    )
    tree = ResolvedNavigationTree(nodes=nodes, warnings=tuple(warnings))
    LOGGER.info(
        "Navigation tree resolved",
        extra={
            "operation": "build_tree",
            "top_level_nodes": len(nodes),
            "warning_count": len(warnings),
        },
    )
    return tree
