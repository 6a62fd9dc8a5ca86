"""Spec linting command for the speclint CLI."""

from __future__ import annotations

import dataclasses
import json
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console

from speclint.kernel.config.models import SpecLintConfig
from speclint.kernel.exceptions import ConfigurationError, InformativeError
from speclint.kernel.linting.report import report_payload
from speclint.kernel.linting.session import LintOptions, LintSession

console = Console(stderr=True)

_OUTPUT_FORMATS = ("text", "json")


def _parse_platforms(value: str) -> frozenset[str] | None:
    names = {p.strip() for p in value.split(",") if p.strip()}
    return frozenset(names) if names else None


def lint(
    ctx: typer.Context,
    inputs: Annotated[
        list[str] | None,
        typer.Argument(
            help="Spec files, directories or repository names (default: specs in the cwd)",
            show_default=False,
        ),
    ] = None,
    quick: Annotated[
        bool,
        typer.Option("--quick", help="Only run static checks; do not fetch or build the source"),
    ] = False,
    only_errors: Annotated[
        bool,
        typer.Option("--only-errors", help="Hide warnings from the report"),
    ] = False,
    platforms: Annotated[
        str,
        typer.Option(
            "--platforms",
            "-p",
            help="Comma-separated platform ids to lint (e.g. ios,osx)",
        ),
    ] = "",
    jobs: Annotated[
        int | None,
        typer.Option("--jobs", "-j", min=1, help="Specs analysed concurrently"),
    ] = None,
    repos_dir: Annotated[
        Path | None,
        typer.Option("--repos-dir", help="Directory holding named spec repositories"),
    ] = None,
    output_format: Annotated[
        str,
        typer.Option("--format", "-f", help="Output format (text, json)"),
    ] = "text",
) -> None:
    """Lint package spec files before publishing them.

    Checks include the spec name against its file name, license, summary,
    homepage and source declarations and, unless --quick is given, that each
    platform's source_files match the fetched source and that it builds.

    Examples
    --------
    speclint lint Bananas.pkgspec
    speclint lint --quick --only-errors
    speclint lint master --platforms ios
    speclint lint specs/ --format json
    """
    if output_format not in _OUTPUT_FORMATS:
        console.print(f"[red]Invalid format '{output_format}'.[/red] Choose from: text, json")
        raise typer.Exit(2)

    obj = ctx.obj if isinstance(ctx.obj, dict) else {}
    config: SpecLintConfig = obj.get("config") or SpecLintConfig()
    if repos_dir is not None:
        config = dataclasses.replace(config, repos_dir=str(repos_dir.expanduser()))

    options = LintOptions(
        quick=quick,
        only_errors=only_errors,
        platforms=_parse_platforms(platforms),
        max_workers=jobs,
    )
    session = LintSession(config, cwd=Path.cwd())

    try:
        result = session.run(inputs or [], options)
    except ConfigurationError as e:
        console.print(f"[red]{e.reason}[/red]")
        raise typer.Exit(2) from e

    if output_format == "json":
        typer.echo(json.dumps(report_payload(result.reports, only_errors), indent=2))
        raise typer.Exit(result.exit_status)

    try:
        result.raise_for_verdict()
    except InformativeError as e:
        typer.echo(str(e), nl=False)
        raise typer.Exit(1) from e

    typer.echo(result.report, nl=False)
