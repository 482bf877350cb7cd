"""Shared pytest fixtures for resolver tests.

This module provides reusable fixtures for:
- Building content trees with front-matter on disk
- Isolated Prometheus registries per test
- Restoring root logging after CLI invocations
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Protocol

import pytest
from prometheus_client import CollectorRegistry

from sitenav.observability import ResolverMetrics, reset_metrics_registry

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path


class PageWriter(Protocol):
    def __call__(
        self,
        relative: str,
        *,
        title: str | None = None,
        order: float | None = None,
        front_matter: str = "",
        body: str = "Body text.\n",
    ) -> Path: ...


@pytest.fixture(autouse=True)
def metrics() -> Iterator[ResolverMetrics]:
    """Route resolver metrics to a private registry for the duration of a test."""
    fresh = ResolverMetrics(CollectorRegistry())
    previous = reset_metrics_registry(fresh)
    yield fresh
    reset_metrics_registry(previous)


@pytest.fixture(autouse=True)
def _restore_root_logging() -> Iterator[None]:
    """Drop handlers installed by ``setup_logging`` so later tests see pytest's capture."""
    root = logging.getLogger()
    level = root.level
    yield
    for handler in list(root.handlers):
        if type(handler) is logging.StreamHandler:
            root.removeHandler(handler)
    root.setLevel(level)


@pytest.fixture
def content_root(tmp_path: Path) -> Path:
    root = tmp_path / "docs"
    root.mkdir()
    return root


@pytest.fixture
def write_page(content_root: Path) -> PageWriter:
    """Return a helper writing a markdown page under ``content_root``."""

    def _write(
        relative: str,
        *,
        title: str | None = None,
        order: float | None = None,
        front_matter: str = "",
        body: str = "Body text.\n",
    ) -> Path:
        lines: list[str] = []
        if title is not None:
            lines.append(f"title: {title}")
        if order is not None:
            lines.extend(["sidebar:", f"  order: {order}"])
        if front_matter:
            lines.append(front_matter.rstrip("\n"))
        text = f"---\n{chr(10).join(lines)}\n---\n{body}" if lines else body
        path = content_root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        return path

    return _write
