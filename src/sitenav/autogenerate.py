"""Expand autogenerate directives into ordered sidebar links.

Matching is recursive: a directive for ``reference`` covers
``reference/a`` as well as ``reference/api/b``. Ordering is deterministic:
pages with an order hint come first (ascending hint, then slug), followed by
pages without a hint in slug order.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from sitenav.errors import EmptyDirectoryError
from sitenav.logging import get_logger
from sitenav.models import ResolvedLink
from sitenav.observability import get_metrics_registry

if TYPE_CHECKING:
    from sitenav.errors import SiteNavError
    from sitenav.models import AutogenerateDeclaration, ContentEntry, ContentIndex

__all__ = [
    "expand_autogenerate",
    "sidebar_sort_key",
]

LOGGER = get_logger(__name__)


def sidebar_sort_key(entry: ContentEntry) -> tuple[bool, int | float, str]:
    """Sort key placing hinted entries first, then alphabetical by slug."""
    if entry.order is None:
        return (True, 0, entry.slug)
    return (False, entry.order, entry.slug)


def expand_autogenerate(
    directive: AutogenerateDeclaration,
    index: ContentIndex,
    *,
    warnings: list[SiteNavError] | None = None,
    strict: bool = False,
    path: str | None = None,
) -> tuple[ResolvedLink, ...]:
    """Return the links generated for ``directive``.

    Parameters
    ----------
    directive : AutogenerateDeclaration
        Directive naming the directory to expand.
    index : ContentIndex
        Content index of the current build.
    warnings : list[SiteNavError] | None, optional
        Collector for the non-fatal :class:`EmptyDirectoryError`.
    strict : bool, optional
        Raise :class:`EmptyDirectoryError` instead of warning. Defaults to False.
    path : str | None, optional
        Location of the directive in the configuration, for diagnostics.

    Returns
    -------
    tuple[ResolvedLink, ...]
        Ordered links; empty when nothing matched.

    Raises
    ------
    EmptyDirectoryError
        If ``strict`` is set and no visible page lives under the directory.
    """
    entries = sorted(
        (entry for entry in index.in_directory(directive.directory) if not entry.hidden),
        key=sidebar_sort_key,
    )
    if not entries:
        problem = EmptyDirectoryError(directive.directory, label=directive.label, path=path)
        if strict:
            raise problem
        get_metrics_registry().empty_directories_total.inc()
        LOGGER.warning(
            problem.message,
            extra={
                "operation": "autogenerate",
                "directory": directive.directory,
                "label": directive.label,
            },
        )
        if warnings is not None:
            warnings.append(problem)
        return ()
    return tuple(
        ResolvedLink(label=entry.sidebar_label, slug=entry.slug, title=entry.title)
        for entry in entries
    )
