"""Single-pass resolver pipeline: index, validate, build, sequence.

Each build creates fresh values and passes them explicitly between stages.
Any fatal error aborts the build before a tree is returned.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from sitenav.config_loader import load_raw_config
from sitenav.content_index import build_content_index
from sitenav.logging import get_logger
from sitenav.observability import new_correlation_id, record_stage_metrics
from sitenav.sequencer import sequence_pages
from sitenav.settings import load_settings
from sitenav.tree_builder import build_tree
from sitenav.validator import validate_config

if TYPE_CHECKING:
    from collections.abc import Mapping

    from sitenav.models import (
        ContentIndex,
        NavigationDeclaration,
        ResolvedNavigationTree,
        SequencedPage,
    )
    from sitenav.settings import ResolverSettings

__all__ = [
    "NavigationBuild",
    "resolve_from_files",
    "resolve_site_navigation",
]

LOGGER = get_logger(__name__)


@dataclass(slots=True, frozen=True)
class NavigationBuild:
    """Everything one resolver run produces."""

    declaration: NavigationDeclaration
    index: ContentIndex
    tree: ResolvedNavigationTree
    pages: tuple[SequencedPage, ...]


def resolve_site_navigation(
    raw_config: Mapping[str, object],
    content_root: Path | str,
    *,
    settings: ResolverSettings | None = None,
    correlation_id: str | None = None,
) -> NavigationBuild:
    """Resolve raw configuration against the content tree at ``content_root``.

    Parameters
    ----------
    raw_config : Mapping[str, object]
        Untyped navigation configuration.
    content_root : Path | str
        Root of the content tree.
    settings : ResolverSettings | None, optional
        Resolver settings. Defaults to :func:`~sitenav.settings.load_settings`.
    correlation_id : str | None, optional
        ID attached to every log line of this build. Generated when omitted.

    Returns
    -------
    NavigationBuild
        Declaration, index, resolved tree and sequenced pages.

    Raises
    ------
    SiteNavError
        Any validation, indexing or resolution failure; no partial result is
        returned.
    """
    resolved_settings = settings or load_settings()
    build_id = correlation_id or new_correlation_id()

    with record_stage_metrics("validate_config", correlation_id=build_id):
        declaration = validate_config(raw_config)
    with record_stage_metrics("content_index", correlation_id=build_id):
        index = build_content_index(content_root, settings=resolved_settings)
    with record_stage_metrics("build_tree", correlation_id=build_id):
        tree = build_tree(declaration, index, strict=resolved_settings.strict_empty_directories)
    with record_stage_metrics("sequence_pages", correlation_id=build_id):
        pages = sequence_pages(tree)

    LOGGER.info(
        "Site navigation resolved",
        extra={
            "operation": "resolve",
            "correlation_id": build_id,
            "page_count": len(pages),
            "warning_count": len(tree.warnings),
        },
    )
    return NavigationBuild(declaration=declaration, index=index, tree=tree, pages=pages)


def resolve_from_files(
    config_path: Path | str,
    content_root: Path | str,
    *,
    settings: ResolverSettings | None = None,
    correlation_id: str | None = None,
) -> NavigationBuild:
    """Load ``config_path`` (YAML or JSON) and resolve it.

    Raises
    ------
    ConfigLoadError
        If the configuration file cannot be loaded.
    SiteNavError
        Any failure of :func:`resolve_site_navigation`.
    """
    raw_config = load_raw_config(Path(config_path))
    return resolve_site_navigation(
        raw_config, content_root, settings=settings, correlation_id=correlation_id
    )
