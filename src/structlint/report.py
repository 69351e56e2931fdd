"""Report formatters: rich terminal text, JSON, and porcelain lines."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from rich.console import Console
    from rich.syntax import Syntax
    from rich.text import Text

    from structlint.rules.findings import Finding
    from structlint.validator import ValidationReport

# Severity -> (mark, style)
_MARKS: dict[str, tuple[str, str]] = {
    "error": ("✖", "red"),
    "warning": ("⚠", "yellow"),
}


def _plural(count: int, word: str) -> str:
    return f"{count} {word}" if count == 1 else f"{count} {word}s"


def _snippet_text(snippet_line: str, style: str, syntax: Syntax) -> Text:
    """Render one ``> N | code`` line: gutter in *style*, code highlighted."""
    from rich.text import Text

    target = snippet_line.startswith(">")
    gutter, sep, code = snippet_line.partition(" | ")
    text = Text("    ")
    if not sep:
        text.append(snippet_line, style="dim")
        return text

    text.append(f"{gutter}{sep}", style=f"bold {style}" if target else "dim")
    highlighted = syntax.highlight(code)
    if highlighted.plain.endswith("\n"):
        highlighted.right_crop(1)
    if not target:
        highlighted.stylize("dim")
    text.append_text(highlighted)
    return text


def _print_finding(console: Console, finding: Finding, syntax: Syntax) -> None:
    from rich.text import Text

    mark, style = _MARKS.get(finding.severity, ("?", "white"))
    location = finding.file if finding.line is None else f"{finding.file}:{finding.line}"

    console.print(Text(location, style="bold cyan"))
    line = Text("  ")
    line.append(f"{mark} ", style=style)
    line.append(finding.message)
    line.append(f" [{finding.rule}]", style="dim")
    console.print(line)

    if finding.snippet:
        for snippet_line in finding.snippet.split("\n"):
            console.print(_snippet_text(snippet_line, style, syntax))
    console.print()


def _print_section(
    console: Console, title: str, findings: tuple[Finding, ...], syntax: Syntax
) -> None:
    if not findings:
        return
    _, style = _MARKS.get(findings[0].severity, ("?", "white"))
    console.print(f"{title} ({len(findings)})", style=f"bold {style}")
    console.print()
    for finding in findings:
        _print_finding(console, finding, syntax)


def format_rich(report: ValidationReport, *, strict: bool = False, color: bool = False) -> str:
    """Format a ValidationReport as human-readable terminal text.

    Example output::

        Found 1 error and 0 warnings

        Errors (1)

        src/user/user.resolver.ts:7
          ✖ Event publishing should only be done in service layer, ... [event-in-resolver]
               6 |   async create() {
            >  7 |     this.events.emit('user.created');
               8 |   }

        Checked 4 files in 1 module
        ✖ Validation failed

    ANSI styling is emitted only when *color* is true.
    """
    from io import StringIO

    from rich.console import Console
    from rich.syntax import Syntax

    buf = StringIO()
    console = Console(
        file=buf,
        force_terminal=color,
        no_color=not color,
        highlight=False,
        soft_wrap=True,
        width=120,
    )

    errors, warnings = len(report.errors), len(report.warnings)
    if errors or warnings:
        console.print(
            f"Found {_plural(errors, 'error')} and {_plural(warnings, 'warning')}",
            style="bold",
        )
        console.print()
        syntax = Syntax("", "typescript", theme="ansi_dark", background_color="default")
        _print_section(console, "Errors", report.errors, syntax)
        _print_section(console, "Warnings", report.warnings, syntax)

    console.print(
        f"Checked {_plural(report.checked_files, 'file')} "
        f"in {_plural(len(report.modules), 'module')}",
        style="dim",
    )
    if not errors and not warnings:
        console.print("✓ All checks passed", style="bold green")
    elif not errors:
        console.print("⚠ Validation completed with warnings", style="bold yellow")
        if not strict:
            console.print("Use --strict to treat warnings as errors", style="dim")
    else:
        console.print("✖ Validation failed", style="bold red")

    return buf.getvalue().rstrip("\n")


def format_json(report: ValidationReport) -> str:
    """Format a ValidationReport as JSON.

    Keys: ``valid``, ``errors``, ``warnings``, ``checked_files``, ``modules``.
    """
    return json.dumps(report.to_dict(), indent=2)


def format_porcelain(report: ValidationReport) -> str:
    """Format a ValidationReport as one line per finding.

    Format: ``severity:rule:file:line:message``

    A missing line is an empty field.  Returns an empty string when there
    are no findings.
    """
    lines: list[str] = []
    for finding in report.findings:
        line = str(finding.line) if finding.line is not None else ""
        lines.append(f"{finding.severity}:{finding.rule}:{finding.file}:{line}:{finding.message}")
    return "\n".join(lines)
