"""Navigation tree resolver for documentation sites."""

from __future__ import annotations

from sitenav.autogenerate import expand_autogenerate
from sitenav.content_index import build_content_index
from sitenav.models import (
    AutogenerateDeclaration,
    ContentEntry,
    ContentIndex,
    GroupDeclaration,
    LinkDeclaration,
    NavigationDeclaration,
    ResolvedGroup,
    ResolvedLink,
    ResolvedNavigationTree,
    SequencedPage,
)
from sitenav.pipeline import NavigationBuild, resolve_from_files, resolve_site_navigation
from sitenav.sequencer import pages_by_slug, sequence_pages
from sitenav.tree_builder import build_tree
from sitenav.validator import validate_config

__all__ = [
    "AutogenerateDeclaration",
    "ContentEntry",
    "ContentIndex",
    "GroupDeclaration",
    "LinkDeclaration",
    "NavigationBuild",
    "NavigationDeclaration",
    "ResolvedGroup",
    "ResolvedLink",
    "ResolvedNavigationTree",
    "SequencedPage",
    "build_content_index",
    "build_tree",
    "expand_autogenerate",
    "pages_by_slug",
    "resolve_from_files",
    "resolve_site_navigation",
    "sequence_pages",
    "validate_config",
]
