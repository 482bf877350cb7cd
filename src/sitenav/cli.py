"""Command-line entry point for resolving site navigation.

``sitenav resolve`` writes the navigation document; ``sitenav check`` only
validates. Failures print an RFC 9457 Problem Details payload to stderr and
exit with status 1.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Annotated

import typer

from sitenav.document_models import navigation_document_from_build
from sitenav.errors import OutputWriteError, SiteNavError
from sitenav.logging import get_logger, setup_logging, with_fields
from sitenav.pipeline import resolve_from_files
from sitenav.problem_details import render_problem
from sitenav.settings import ResolverSettings, load_settings

__all__ = ["app", "check", "resolve"]

LOGGER = get_logger(__name__)

app = typer.Typer(
    help="Resolve documentation sidebar configuration against a content tree.",
    no_args_is_help=True,
    add_completion=False,
)

ConfigArgument = Annotated[
    Path,
    typer.Argument(help="Navigation configuration file (YAML or JSON).", exists=True, dir_okay=False),
]
ContentOption = Annotated[
    Path,
    typer.Option("--content", "-c", help="Content root directory.", file_okay=False),
]
StrictOption = Annotated[
    bool,
    typer.Option("--strict", help="Fail when an autogenerate directory matches no content."),
]


def _settings(*, strict: bool) -> ResolverSettings:
    settings = load_settings()
    if strict and not settings.strict_empty_directories:
        settings = settings.model_copy(update={"strict_empty_directories": True})
    setup_logging(getattr(logging, settings.log_level), json_output=settings.log_json)
    return settings


def _fail(exc: SiteNavError, *, command: str) -> typer.Exit:
    with_fields(LOGGER, operation=command).error(
        "Navigation %s failed", command, extra={"error_code": exc.code.value}
    )
    typer.echo(render_problem(exc.to_problem_details(), indent=2), err=True)
    return typer.Exit(code=1)


@app.command()
def resolve(
    config: ConfigArgument,
    content: ContentOption = Path("src/content/docs"),
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Write the document here instead of stdout."),
    ] = None,
    strict: StrictOption = False,
) -> None:
    """Resolve CONFIG against the content tree and emit the navigation document."""
    try:
        settings = _settings(strict=strict)
        build = resolve_from_files(config, content, settings=settings)
    except SiteNavError as exc:
        raise _fail(exc, command="resolve") from exc

    rendered = navigation_document_from_build(build).model_dump_json(by_alias=True, indent=2)
    if output is None:
        typer.echo(rendered)
        return
    try:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(rendered + "\n", encoding="utf-8")
    except OSError as exc:
        raise _fail(OutputWriteError(str(output), cause=exc), command="resolve") from exc
    typer.echo(f"Wrote {len(build.pages)} pages to {output}", err=True)


@app.command()
def check(
    config: ConfigArgument,
    content: ContentOption = Path("src/content/docs"),
    strict: StrictOption = False,
) -> None:
    """Validate CONFIG and the content tree without writing output."""
    try:
        settings = _settings(strict=strict)
        build = resolve_from_files(config, content, settings=settings)
    except SiteNavError as exc:
        raise _fail(exc, command="check") from exc

    for warning in build.tree.warnings:
        typer.echo(f"warning: {warning.message}", err=True)
    typer.echo(f"OK: {len(build.pages)} pages, {len(build.tree.warnings)} warnings")


if __name__ == "__main__":  # pragma: no cover - manual execution entrypoint
    app()
