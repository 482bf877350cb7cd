"""End-to-end resolver scenarios against content trees written to disk."""

from __future__ import annotations

import json
from pathlib import Path
from typing import TYPE_CHECKING

import pytest
import yaml

from sitenav import pages_by_slug, resolve_from_files, resolve_site_navigation
from sitenav.errors import (
    ConfigLoadError,
    DuplicateSlugError,
    EmptyDirectoryError,
    MissingRequiredFieldError,
    UnknownSlugError,
)
from sitenav.models import ResolvedGroup, ResolvedLink
from sitenav.settings import ResolverSettings

if TYPE_CHECKING:
    from collections.abc import Callable

    from sitenav.observability import ResolverMetrics


def _stage_runs(metrics: ResolverMetrics, stage: str, status: str) -> float | None:
    return metrics.registry.get_sample_value(
        "sitenav_stage_runs_total", {"stage": stage, "status": status}
    )


@pytest.fixture
def settings() -> ResolverSettings:
    return ResolverSettings(max_workers=2)


def test_single_page_group(
    content_root: Path, write_page: Callable[..., Path], settings: ResolverSettings
) -> None:
    write_page("intro/start.md", title="Getting started")
    config = {
        "title": "Docs",
        "sidebar": [{"label": "Intro", "items": [{"label": "Start", "slug": "intro/start"}]}],
    }

    build = resolve_site_navigation(config, content_root, settings=settings)

    assert build.tree.nodes == (
        ResolvedGroup(
            label="Intro",
            children=(ResolvedLink(label="Start", slug="intro/start", title="Getting started"),),
        ),
    )
    (page,) = build.pages
    assert page.slug == "intro/start"
    assert page.previous is None
    assert page.next is None
    assert page.breadcrumb == ("Intro",)


def test_autogenerate_orders_hinted_pages_first(
    content_root: Path, write_page: Callable[..., Path], settings: ResolverSettings
) -> None:
    write_page("reference/a.md", title="A")
    write_page("reference/b.md", title="B", order=1)
    config = {"title": "Docs", "sidebar": [{"label": "Ref", "autogenerate": {"directory": "reference"}}]}

    build = resolve_site_navigation(config, content_root, settings=settings)

    (group,) = build.tree.nodes
    assert isinstance(group, ResolvedGroup)
    assert group.label == "Ref"
    assert [child.slug for child in group.children] == ["reference/b", "reference/a"]  # type: ignore[union-attr]
    assert [(page.slug, page.previous, page.next) for page in build.pages] == [
        ("reference/b", None, "reference/a"),
        ("reference/a", "reference/b", None),
    ]


def test_nested_autogenerate_collects_subdirectories(
    content_root: Path, write_page: Callable[..., Path], settings: ResolverSettings
) -> None:
    write_page("reference/index.md", title="Overview", order=0)
    write_page("reference/cli.md", title="CLI")
    write_page("reference/api/client.md", title="Client")
    write_page("reference/api/server.md", title="Server", order=5)
    config = {"title": "Docs", "sidebar": [{"label": "Ref", "autogenerate": {"directory": "./reference/"}}]}

    build = resolve_site_navigation(config, content_root, settings=settings)

    assert [page.slug for page in build.pages] == [
        "reference",
        "reference/api/server",
        "reference/api/client",
        "reference/cli",
    ]


def test_duplicate_slug_aborts_the_build(
    content_root: Path,
    write_page: Callable[..., Path],
    settings: ResolverSettings,
    metrics: ResolverMetrics,
) -> None:
    write_page("guide/x.md")
    write_page("guide/x/index.md")

    with pytest.raises(DuplicateSlugError) as excinfo:
        resolve_site_navigation({"title": "Docs", "sidebar": ["guide/x"]}, content_root, settings=settings)

    assert excinfo.value.slug == "guide/x"
    assert _stage_runs(metrics, "content_index", "error") == 1.0
    assert _stage_runs(metrics, "build_tree", "success") is None


def test_unknown_slug_aborts_the_build(
    content_root: Path,
    write_page: Callable[..., Path],
    settings: ResolverSettings,
    metrics: ResolverMetrics,
) -> None:
    write_page("intro/start.md")
    config = {"title": "Docs", "sidebar": [{"label": "Intro", "items": ["intro/start", "missing/page"]}]}

    with pytest.raises(UnknownSlugError) as excinfo:
        resolve_site_navigation(config, content_root, settings=settings)

    assert excinfo.value.slug == "missing/page"
    assert excinfo.value.path == "sidebar[0].items[1]"
    assert _stage_runs(metrics, "build_tree", "error") == 1.0


def test_invalid_configuration_fails_before_scanning(
    content_root: Path, settings: ResolverSettings, metrics: ResolverMetrics
) -> None:
    with pytest.raises(MissingRequiredFieldError):
        resolve_site_navigation({"sidebar": []}, content_root, settings=settings)

    assert _stage_runs(metrics, "validate_config", "error") == 1.0
    assert _stage_runs(metrics, "content_index", "success") is None


def test_declared_structure_is_mirrored(
    content_root: Path, write_page: Callable[..., Path], settings: ResolverSettings
) -> None:
    for slug in ("zeta", "alpha", "guide/b", "guide/a"):
        write_page(f"{slug}.md", order=1)
    config = {
        "title": "Docs",
        "sidebar": ["zeta", {"label": "Guide", "items": ["guide/b", "guide/a"]}, "alpha"],
    }

    build = resolve_site_navigation(config, content_root, settings=settings)

    assert [page.slug for page in build.pages] == ["zeta", "guide/b", "guide/a", "alpha"]
    assert all(link.slug in build.index for link in build.tree.links())


def test_resolving_twice_yields_equal_results(
    content_root: Path, write_page: Callable[..., Path], settings: ResolverSettings
) -> None:
    write_page("guide/a.md", order=2)
    write_page("guide/b.md")
    write_page("guide/deep/c.md", order=1)
    config = {
        "title": "Docs",
        "sidebar": [{"label": "Guide", "autogenerate": {"directory": "guide"}}, "guide/b"],
    }

    first = resolve_site_navigation(config, content_root, settings=settings)
    second = resolve_site_navigation(config, content_root, settings=settings)

    assert first.tree == second.tree
    assert first.pages == second.pages


def test_empty_directory_is_a_warning_unless_strict(
    content_root: Path, write_page: Callable[..., Path]
) -> None:
    write_page("guide/a.md")
    config = {
        "title": "Docs",
        "sidebar": ["guide/a", {"label": "Blog", "autogenerate": {"directory": "blog"}}],
    }

    build = resolve_site_navigation(config, content_root, settings=ResolverSettings())

    assert [page.slug for page in build.pages] == ["guide/a"]
    assert [type(warning) for warning in build.tree.warnings] == [EmptyDirectoryError]

    with pytest.raises(EmptyDirectoryError):
        resolve_site_navigation(
            config, content_root, settings=ResolverSettings(strict_empty_directories=True)
        )


def test_pages_by_slug_lookup(
    content_root: Path, write_page: Callable[..., Path], settings: ResolverSettings
) -> None:
    write_page("a.md")
    write_page("b.md")

    build = resolve_site_navigation({"title": "Docs", "sidebar": ["a", "b"]}, content_root, settings=settings)

    assert pages_by_slug(build.pages)["b"].previous == "a"


def test_every_stage_is_recorded(
    content_root: Path,
    write_page: Callable[..., Path],
    settings: ResolverSettings,
    metrics: ResolverMetrics,
) -> None:
    write_page("a.md")

    resolve_site_navigation({"title": "Docs", "sidebar": ["a"]}, content_root, settings=settings)

    for stage in ("validate_config", "content_index", "build_tree", "sequence_pages"):
        assert _stage_runs(metrics, stage, "success") == 1.0


@pytest.mark.parametrize("suffix", [".yaml", ".json"])
def test_resolve_from_files(
    tmp_path: Path,
    content_root: Path,
    write_page: Callable[..., Path],
    settings: ResolverSettings,
    suffix: str,
) -> None:
    write_page("intro/start.md", title="Start")
    config = {"title": "Docs", "sidebar": [{"label": "Intro", "items": ["intro/start"]}]}
    config_path = tmp_path / f"navigation{suffix}"
    config_path.write_text(
        yaml.safe_dump(config) if suffix == ".yaml" else json.dumps(config), encoding="utf-8"
    )

    build = resolve_from_files(config_path, content_root, settings=settings)

    assert build.declaration.title == "Docs"
    assert [page.slug for page in build.pages] == ["intro/start"]


def test_resolve_from_missing_file(tmp_path: Path, content_root: Path) -> None:
    with pytest.raises(ConfigLoadError):
        resolve_from_files(tmp_path / "absent.yaml", content_root)
