"""Tests for structlint.report — rich, JSON, and porcelain formatters."""

from __future__ import annotations

import json

import pytest

from structlint.report import format_json, format_porcelain, format_rich
from structlint.rules.findings import Finding
from structlint.validator import ValidationReport

_ERROR = Finding(
    file="src/user/user.resolver.ts",
    rule="event-in-resolver",
    message="Event publishing should only be done in service layer, not in resolvers. "
    "Move this.emit() to a service method.",
    severity="error",
    line=7,
    snippet="  6 |   async create() {\n> 7 |     this.events.emit('x');\n  8 |   }",
)
_WARNING = Finding(
    file="user",
    rule="missing-module",
    message='Module "user" is missing a .module.ts file',
    severity="warning",
)


def _report(*, errors: tuple[Finding, ...] = (), warnings: tuple[Finding, ...] = ()) -> ValidationReport:
    return ValidationReport(errors=errors, warnings=warnings, checked_files=4, modules=("user",))


class TestFormatRich:
    def test_clean(self) -> None:
        output = format_rich(_report())
        assert "Checked 4 files in 1 module" in output
        assert "✓ All checks passed" in output
        assert "Found" not in output

    def test_errors(self) -> None:
        output = format_rich(_report(errors=(_ERROR,), warnings=(_WARNING,)))
        assert "Found 1 error and 1 warning" in output
        assert "src/user/user.resolver.ts:7" in output
        assert "✖ Event publishing should only be done in service layer" in output
        assert "[event-in-resolver]" in output
        assert "> 7 |     this.events.emit('x');" in output
        assert "⚠ Module \"user\" is missing a .module.ts file [missing-module]" in output
        assert output.rstrip().endswith("✖ Validation failed")

    def test_warnings_only(self) -> None:
        output = format_rich(_report(warnings=(_WARNING,)))
        assert "⚠ Validation completed with warnings" in output
        assert "Use --strict to treat warnings as errors" in output

    def test_warnings_strict_hint_hidden(self) -> None:
        output = format_rich(_report(warnings=(_WARNING,)), strict=True)
        assert "Use --strict" not in output

    def test_no_ansi_without_color(self) -> None:
        assert "\x1b[" not in format_rich(_report(errors=(_ERROR,)))

    def test_grouped_by_severity(self) -> None:
        output = format_rich(_report(errors=(_ERROR,), warnings=(_WARNING,)))
        errors_at = output.index("Errors (1)")
        warnings_at = output.index("Warnings (1)")
        assert errors_at < output.index("[event-in-resolver]") < warnings_at
        assert warnings_at < output.index("[missing-module]")

    def test_warnings_only_has_no_errors_header(self) -> None:
        output = format_rich(_report(warnings=(_WARNING,)))
        assert "Errors (" not in output
        assert "Warnings (1)" in output

    def test_snippet_code_is_highlighted(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("TERM", "xterm-256color")
        monkeypatch.delenv("NO_COLOR", raising=False)
        finding = Finding(
            file="src/a/a.model.ts",
            rule="model-location",
            message="misplaced",
            severity="error",
            line=2,
            snippet="  1 | \n> 2 | export class A {}",
        )
        output = format_rich(_report(errors=(finding,)), color=True)
        (target,) = [line for line in output.split("\n") if "> 2 |" in line]
        # gutter style plus separate token styles for the code
        assert target.count("\x1b[") > 2
        assert "export" in target
        assert "class" in target


class TestFormatJson:
    def test_shape(self) -> None:
        data = json.loads(format_json(_report(errors=(_ERROR,), warnings=(_WARNING,))))
        assert data["valid"] is False
        assert data["checked_files"] == 4
        assert data["modules"] == ["user"]
        assert data["errors"][0] == {
            "file": "src/user/user.resolver.ts",
            "line": 7,
            "rule": "event-in-resolver",
            "message": _ERROR.message,
            "severity": "error",
            "snippet": _ERROR.snippet,
        }
        assert data["warnings"][0]["line"] is None
        assert data["warnings"][0]["snippet"] is None

    def test_clean(self) -> None:
        data = json.loads(format_json(_report()))
        assert data == {
            "valid": True,
            "errors": [],
            "warnings": [],
            "checked_files": 4,
            "modules": ["user"],
        }


class TestFormatPorcelain:
    def test_lines(self) -> None:
        output = format_porcelain(_report(errors=(_ERROR,), warnings=(_WARNING,)))
        assert output.split("\n") == [
            f"error:event-in-resolver:src/user/user.resolver.ts:7:{_ERROR.message}",
            f"warning:missing-module:user::{_WARNING.message}",
        ]

    def test_empty(self) -> None:
        assert format_porcelain(_report()) == ""
