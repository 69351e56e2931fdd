"""structlint CLI entry point."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click

from structlint import __version__
from structlint.rules.findings import ALL_RULES


@click.group()
@click.version_option(version=__version__, prog_name="structlint")
@click.option("--verbose", "-v", is_flag=True, help="Verbose output.")
def main(*, verbose: bool) -> None:
    """structlint - structural validator for NestJS/GraphQL projects."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


@main.command()
@click.option(
    "--path",
    "root",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Project root (default: current directory).",
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Configuration file (default: <root>/.structlint.yml if present).",
)
@click.option(
    "--disable",
    "disabled",
    type=click.Choice(sorted(ALL_RULES)),
    multiple=True,
    help="Disable a rule by id (repeatable).",
)
@click.option(
    "--strict",
    is_flag=True,
    default=False,
    help="Treat warnings as errors.",
)
@click.option("--json", "output_json", is_flag=True, help="Output as JSON.")
@click.option(
    "--format",
    "fmt",
    type=click.Choice(["rich", "json", "porcelain"]),
    default=None,
    help="Output format (default: rich).",
)
def validate(
    *,
    root: Path | None,
    config_path: Path | None,
    disabled: tuple[str, ...],
    strict: bool,
    output_json: bool,
    fmt: str | None,
) -> None:
    """Validate project structure against NestJS/GraphQL conventions.

    Exit codes: 0 = clean, or warnings only without --strict;
    1 = errors, or warnings with --strict; 2 = configuration error.
    """
    import dataclasses

    from structlint.config import ConfigError, resolve_config
    from structlint.report import format_json, format_porcelain, format_rich
    from structlint.validator import ValidatorError
    from structlint.validator import validate as run_validate

    project_root = root or Path.cwd()

    if output_json:
        fmt = "json"
    elif fmt is None:
        fmt = "rich"

    try:
        config = resolve_config(project_root, config_path)
        if disabled:
            config = dataclasses.replace(config, rules=config.rules.without(disabled))
        report = run_validate(project_root, config=config)
    except (ConfigError, ValidatorError) as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(2)

    if fmt == "rich":
        output = format_rich(report, strict=strict, color=sys.stdout.isatty())
    elif fmt == "json":
        output = format_json(report)
    else:
        output = format_porcelain(report)
    if output:
        click.echo(output)

    if not report.valid or (strict and report.warnings):
        sys.exit(1)
