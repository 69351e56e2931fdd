"""Validation orchestrator: discover, classify, parse, evaluate rules, attach snippets."""

from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from structlint.config import ValidatorConfig
from structlint.rules.context import ModuleContext, ProjectContext
from structlint.rules.engine import RuleSet, evaluate_module, evaluate_project
from structlint.rules.findings import ALL_RULES
from structlint.rules.resolver_index import collect_resolver_fields
from structlint.source.classifier import FileRole, SourceFile, classify, group_by_module
from structlint.source.declarations import extract_declarations
from structlint.source.discovery import discover_files

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from structlint.rules.findings import Finding
    from structlint.source.declarations import ParsedFile

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class ValidatorError(Exception):
    """Raised when a validation run cannot start (unusable root or rule switches)."""


# ---------------------------------------------------------------------------
# Data classes
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ValidationReport:
    """Result of a validation run."""

    errors: tuple[Finding, ...] = ()
    warnings: tuple[Finding, ...] = ()
    checked_files: int = 0
    modules: tuple[str, ...] = ()

    @property
    def valid(self) -> bool:
        return not self.errors

    @property
    def findings(self) -> tuple[Finding, ...]:
        return self.errors + self.warnings

    def to_dict(self) -> dict[str, object]:
        return {
            "valid": self.valid,
            "errors": [f.to_dict() for f in self.errors],
            "warnings": [f.to_dict() for f in self.warnings],
            "checked_files": self.checked_files,
            "modules": list(self.modules),
        }


# ---------------------------------------------------------------------------
# Snippets
# ---------------------------------------------------------------------------


def extract_snippet(content: str, line: int) -> str | None:
    """Render lines ``line-1 .. line+1`` of *content*, marking *line* with ``>``.

    Line numbers are right-aligned to the widest number shown::

        >  9 | @InputType()
          10 | export class CreateUserInput {
    """
    if line < 1:
        return None
    lines = content.split("\n")
    start = max(0, line - 2)
    end = min(len(lines), line + 1)
    if start >= end:
        return None
    width = len(str(end))
    rendered = []
    for idx in range(start, end):
        number = idx + 1
        marker = ">" if number == line else " "
        rendered.append(f"{marker} {number:>{width}} | {lines[idx]}")
    return "\n".join(rendered)


def _attach_snippets(root: Path, findings: Iterable[Finding]) -> list[Finding]:
    contents: dict[str, str | None] = {}
    enriched: list[Finding] = []
    for finding in findings:
        if finding.line is None or finding.snippet is not None:
            enriched.append(finding)
            continue
        if finding.file not in contents:
            try:
                contents[finding.file] = (root / finding.file).read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError):
                logger.debug("Cannot read %s for snippet", finding.file)
                contents[finding.file] = None
        content = contents[finding.file]
        snippet = extract_snippet(content, finding.line) if content is not None else None
        enriched.append(dataclasses.replace(finding, snippet=snippet))
    return enriched


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------


def _resolve_rules(
    rules: RuleSet | Mapping[str, bool] | None, config: ValidatorConfig
) -> RuleSet:
    if rules is None:
        return config.rules
    if isinstance(rules, RuleSet):
        return rules
    try:
        return RuleSet.from_mapping(rules)
    except ValueError as exc:
        msg = f"Invalid rule switches: {exc}"
        raise ValidatorError(msg) from exc


def validate(
    root: Path | str,
    rules: RuleSet | Mapping[str, bool] | None = None,
    *,
    config: ValidatorConfig | None = None,
) -> ValidationReport:
    """Validate the project under *root* and return a fresh report.

    Parameters
    ----------
    root:
        Project root directory.  Paths in findings are relative to it.
    rules:
        Which rules run.  Either a :class:`RuleSet` or a mapping of rule
        family (``check_entity_files``) or rule id (``module-path``) to a
        boolean.  Families and rules left out are enabled.  When *None*,
        the rules from *config* apply.
    config:
        Discovery settings (ignore patterns, ignore file, extensions) and
        default rules.  Defaults to :class:`ValidatorConfig()`.

    Returns
    -------
    ValidationReport
        Errors and warnings, the number of module files checked, and the
        module names in order of first appearance.

    Raises
    ------
    ValidatorError
        When *root* is missing or not a directory, or *rules* names an
        unknown family or rule id.
    """
    root_path = Path(root)
    if not root_path.is_dir():
        msg = f"Root path does not exist or is not a directory: {root_path}"
        raise ValidatorError(msg)

    cfg = config if config is not None else ValidatorConfig()
    rule_set = _resolve_rules(rules, cfg)

    # Step a: enumerate and classify.
    paths = discover_files(
        root_path,
        extensions=cfg.extensions,
        ignore_file=cfg.ignore_file,
        extra_ignores=cfg.ignore,
    )
    sources = [SourceFile(path=p, role=classify(p)) for p in paths]

    # Step b: module map.
    modules = group_by_module(sources, cfg.extensions)

    # Step c: parse each grouped file once.
    parsed: dict[str, ParsedFile | None] = {}
    for files in modules.values():
        for source in files:
            if source.path not in parsed:
                parsed[source.path] = extract_declarations(root_path / source.path, source.path)

    # Step d: resolver field pre-pass over every module's resolver files.
    resolver_files = [
        parsed[source.path]
        for files in modules.values()
        for source in files
        if source.role is FileRole.RESOLVER
    ]
    resolver_fields = collect_resolver_fields(p for p in resolver_files if p is not None)

    # Step e: evaluate rules.
    enabled = rule_set.enabled_rules()
    logger.debug("Enabled rules (%d/%d): %s", len(enabled), len(ALL_RULES), ", ".join(enabled))
    findings = evaluate_project(ProjectContext(files=tuple(sources)), rule_set)
    checked_files = 0
    for name, files in modules.items():
        checked_files += len(files)
        ctx = ModuleContext(
            module=name,
            files=tuple(files),
            parsed=parsed,
            resolver_fields=resolver_fields,
        )
        findings.extend(evaluate_module(ctx, rule_set))

    # Step f: snippets.
    findings = _attach_snippets(root_path, findings)

    errors = tuple(f for f in findings if f.is_error)
    warnings = tuple(f for f in findings if not f.is_error)
    logger.debug(
        "Validated %d files in %d modules: %d errors, %d warnings",
        checked_files,
        len(modules),
        len(errors),
        len(warnings),
    )
    return ValidationReport(
        errors=errors,
        warnings=warnings,
        checked_files=checked_files,
        modules=tuple(modules),
    )
