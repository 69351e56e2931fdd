"""Tests for `structlint validate` CLI command."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

from click.testing import CliRunner

from structlint import __version__
from structlint.cli import main

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path

    MakeProject = Callable[[dict[str, str]], Path]


CLEAN_PROJECT = {
    "src/app.module.ts": "@Module({})\nexport class AppModule {}\n",
    "src/user/user.module.ts": "@Module({})\nexport class UserModule {}\n",
    "src/user/user.service.ts": "@Injectable()\nexport class UserService {}\n",
}

WARNING_PROJECT = {
    "src/user/user.service.ts": "@Injectable()\nexport class UserService {}\n",
}

ERROR_PROJECT = {
    "src/user/user.module.ts": "@Module({})\nexport class UserModule {}\n",
    "src/user/user.service.ts": "export class UserHelper {}\n",
}


class TestMain:
    def test_version(self) -> None:
        result = CliRunner().invoke(main, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_help_lists_validate(self) -> None:
        result = CliRunner().invoke(main, ["--help"])
        assert result.exit_code == 0
        assert "validate" in result.output


class TestValidateCommand:
    def test_clean_project(self, make_project: MakeProject) -> None:
        root = make_project(CLEAN_PROJECT)
        result = CliRunner().invoke(main, ["validate", "--path", str(root)])
        assert result.exit_code == 0, result.output
        assert "All checks passed" in result.output
        assert "Checked 3 files in 2 modules" in result.output

    def test_warnings_pass_without_strict(self, make_project: MakeProject) -> None:
        root = make_project(WARNING_PROJECT)
        result = CliRunner().invoke(main, ["validate", "--path", str(root)])
        assert result.exit_code == 0, result.output
        assert "missing-module" in result.output
        assert "Use --strict to treat warnings as errors" in result.output

    def test_warnings_fail_with_strict(self, make_project: MakeProject) -> None:
        root = make_project(WARNING_PROJECT)
        result = CliRunner().invoke(main, ["validate", "--path", str(root), "--strict"])
        assert result.exit_code == 1

    def test_errors_fail(self, make_project: MakeProject) -> None:
        root = make_project(ERROR_PROJECT)
        result = CliRunner().invoke(main, ["validate", "--path", str(root)])
        assert result.exit_code == 1
        assert "src/user/user.service.ts" in result.output
        assert "[service-class]" in result.output
        assert "Validation failed" in result.output

    def test_json_output(self, make_project: MakeProject) -> None:
        root = make_project(ERROR_PROJECT)
        result = CliRunner().invoke(main, ["validate", "--path", str(root), "--json"])
        assert result.exit_code == 1
        data = json.loads(result.output)
        assert data["valid"] is False
        assert data["errors"][0]["rule"] == "service-class"
        assert data["modules"] == ["user"]

    def test_porcelain_output(self, make_project: MakeProject) -> None:
        root = make_project(ERROR_PROJECT)
        result = CliRunner().invoke(
            main, ["validate", "--path", str(root), "--format", "porcelain"]
        )
        assert result.exit_code == 1
        assert result.output.startswith("error:service-class:src/user/user.service.ts::")

    def test_disable_rule(self, make_project: MakeProject) -> None:
        root = make_project(ERROR_PROJECT)
        result = CliRunner().invoke(
            main, ["validate", "--path", str(root), "--disable", "service-class"]
        )
        assert result.exit_code == 0, result.output

    def test_disable_unknown_rule(self, make_project: MakeProject) -> None:
        root = make_project(CLEAN_PROJECT)
        result = CliRunner().invoke(
            main, ["validate", "--path", str(root), "--disable", "not-a-rule"]
        )
        assert result.exit_code == 2

    def test_config_file(self, make_project: MakeProject) -> None:
        root = make_project(
            {**ERROR_PROJECT, ".structlint.yml": "rules:\n  check_service_files: false\n"}
        )
        result = CliRunner().invoke(main, ["validate", "--path", str(root)])
        assert result.exit_code == 0, result.output

    def test_explicit_config(self, make_project: MakeProject, tmp_path: Path) -> None:
        root = make_project(ERROR_PROJECT)
        config = tmp_path / "custom.yml"
        config.write_text("disable: [service-class]\n")
        result = CliRunner().invoke(
            main, ["validate", "--path", str(root), "--config", str(config)]
        )
        assert result.exit_code == 0, result.output

    def test_invalid_config(self, make_project: MakeProject) -> None:
        root = make_project({**CLEAN_PROJECT, ".structlint.yml": "version: 7\n"})
        result = CliRunner().invoke(main, ["validate", "--path", str(root)])
        assert result.exit_code == 2
        assert "unsupported version 7" in result.output

    def test_missing_root(self, tmp_path: Path) -> None:
        result = CliRunner().invoke(main, ["validate", "--path", str(tmp_path / "nowhere")])
        assert result.exit_code == 2
        assert "does not exist" in result.output

    def test_verbose(self, make_project: MakeProject) -> None:
        root = make_project(CLEAN_PROJECT)
        result = CliRunner().invoke(main, ["--verbose", "validate", "--path", str(root)])
        assert result.exit_code == 0, result.output
