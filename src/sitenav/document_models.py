"""Serialized navigation documents consumed by rendering collaborators.

The document is the JSON form of one build: site metadata, the resolved
sidebar and per-page pagination. Field names use camelCase aliases on the
wire.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING, Final, Literal

from pydantic import BaseModel, ConfigDict, Field

from sitenav.models import ResolvedGroup, ResolvedLink

if TYPE_CHECKING:
    from sitenav.models import NavigationDeclaration, ResolvedNode
    from sitenav.pipeline import NavigationBuild

__all__ = [
    "NAVIGATION_SCHEMA_VERSION",
    "LogoDocument",
    "NavigationDocument",
    "PageSequenceDocument",
    "ResolvedNodeDocument",
    "SiteDocument",
    "SocialLinkDocument",
    "navigation_document_from_build",
    "node_to_document",
]

NAVIGATION_SCHEMA_VERSION: Final[str] = "1.0.0"


def _utc_iso_now() -> str:
    return datetime.now(tz=UTC).isoformat()


class LogoDocument(BaseModel):
    """Logo as emitted in the navigation document."""

    model_config = ConfigDict(populate_by_name=True)

    src: str | None = None
    light: str | None = None
    dark: str | None = None
    alt: str = ""
    replaces_title: bool = Field(False, alias="replacesTitle")


class SocialLinkDocument(BaseModel):
    """Social link entry."""

    platform: str
    url: str
    label: str | None = None


class SiteDocument(BaseModel):
    """Site-level metadata."""

    model_config = ConfigDict(populate_by_name=True)

    title: str
    base_url: str | None = Field(None, alias="baseUrl")
    logo: LogoDocument | None = None
    social: list[SocialLinkDocument] = Field(default_factory=list)


class ResolvedNodeDocument(BaseModel):
    """Sidebar node; links carry ``slug``/``title``, groups carry ``children``."""

    model_config = ConfigDict(populate_by_name=True)

    kind: Literal["link", "group"]
    label: str
    slug: str | None = None
    title: str | None = None
    collapsed: bool = False
    children: list[ResolvedNodeDocument] = Field(default_factory=list)


class PageSequenceDocument(BaseModel):
    """Pagination and breadcrumb for one page."""

    model_config = ConfigDict(populate_by_name=True)

    slug: str
    label: str
    position: int
    previous: str | None = None
    next: str | None = None
    breadcrumb: list[str] = Field(default_factory=list)


class NavigationDocument(BaseModel):
    """Top-level navigation document for one build."""

    model_config = ConfigDict(populate_by_name=True)

    schema_version: str = Field(NAVIGATION_SCHEMA_VERSION, alias="schemaVersion")
    generated_at: str = Field(default_factory=_utc_iso_now, alias="generatedAt")
    site: SiteDocument
    sidebar: list[ResolvedNodeDocument] = Field(default_factory=list)
    pages: list[PageSequenceDocument] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)


def node_to_document(node: ResolvedNode) -> ResolvedNodeDocument:
    """Convert a resolved node (and its subtree) to its document form."""
    match node:
        case ResolvedLink(label=label, slug=slug, title=title):
            return ResolvedNodeDocument(kind="link", label=label, slug=slug, title=title)
        case ResolvedGroup(label=label, children=children, collapsed=collapsed):
            return ResolvedNodeDocument(
                kind="group",
                label=label,
                collapsed=collapsed,
                children=[node_to_document(child) for child in children],
            )
        case _:
            msg = f"Unsupported resolved node: {type(node).__name__}"
            raise TypeError(msg)


def _site_document(declaration: NavigationDeclaration) -> SiteDocument:
    logo = declaration.logo
    return SiteDocument(
        title=declaration.title,
        base_url=declaration.base_url,
        logo=(
            LogoDocument(
                src=logo.src,
                light=logo.light,
                dark=logo.dark,
                alt=logo.alt,
                replaces_title=logo.replaces_title,
            )
            if logo is not None
            else None
        ),
        social=[
            SocialLinkDocument(platform=link.platform, url=link.url, label=link.label)
            for link in declaration.social
        ],
    )


def navigation_document_from_build(build: NavigationBuild) -> NavigationDocument:
    """Build a :class:`NavigationDocument` from a completed build.

    Warnings collected on the tree are carried over as their messages.
    """
    return NavigationDocument(
        site=_site_document(build.declaration),
        sidebar=[node_to_document(node) for node in build.tree.nodes],
        pages=[
            PageSequenceDocument(
                slug=page.slug,
                label=page.label,
                position=page.position,
                previous=page.previous,
                next=page.next,
                breadcrumb=list(page.breadcrumb),
            )
            for page in build.pages
        ],
        warnings=[warning.message for warning in build.tree.warnings],
    )
