"""Tests for structlint.source.classifier — file roles and module grouping."""

from __future__ import annotations

import pytest

from structlint.source.classifier import (
    FileRole,
    SourceFile,
    classify,
    extract_module_name,
    group_by_module,
)


class TestClassify:
    @pytest.mark.parametrize(
        ("path", "role"),
        [
            ("src/user/create-user.input.ts", FileRole.INPUT),
            ("src/user/user.response.ts", FileRole.RESPONSE),
            ("src/user/user.model.ts", FileRole.MODEL),
            ("src/user/user.entity.ts", FileRole.ENTITY),
            ("src/user/user.repository.ts", FileRole.REPOSITORY),
            ("src/user/user.module.ts", FileRole.MODULE),
            ("src/user/user.resolver.ts", FileRole.RESOLVER),
            ("src/user/user.service.ts", FileRole.SERVICE),
            ("src/user/user.controller.ts", FileRole.OTHER),
            ("src/user/helpers.ts", FileRole.OTHER),
        ],
    )
    def test_suffix_roles(self, path: str, role: FileRole) -> None:
        assert classify(path) is role

    def test_needs_category_segment(self) -> None:
        assert classify("src/user/userinput.ts") is FileRole.OTHER
        assert classify("src/module.ts") is FileRole.OTHER

    def test_case_sensitive(self) -> None:
        assert classify("src/user/user.Service.ts") is FileRole.OTHER

    def test_tsx_extension(self) -> None:
        assert classify("src/user/user.service.tsx") is FileRole.SERVICE


class TestExtractModuleName:
    def test_container_directory(self) -> None:
        assert extract_module_name("src/modules/billing/invoice.service.ts") == "billing"
        assert extract_module_name("libs/domains/auth/token.ts") == "auth"

    def test_container_beats_src(self) -> None:
        assert extract_module_name("src/modules/billing/dto/x.input.ts") == "billing"

    def test_src_child(self) -> None:
        assert extract_module_name("src/user/dto/create-user.input.ts") == "user"

    def test_src_skips_files(self) -> None:
        # src/app.module.ts falls through to the bare-filename pattern.
        assert extract_module_name("src/app.module.ts") == "app"

    def test_parent_matches_basename(self) -> None:
        assert extract_module_name("lib/orders/orders.service.ts") == "orders"

    def test_bare_filename(self) -> None:
        assert extract_module_name("user-profile.resolver.ts") == "user-profile"

    def test_bare_filename_requires_known_category(self) -> None:
        assert extract_module_name("user.repository.ts") is None

    def test_no_module(self) -> None:
        assert extract_module_name("scripts/seed.ts") is None
        assert extract_module_name("main.ts") is None

    def test_extension_set(self) -> None:
        assert extract_module_name("user.service.tsx", (".ts", ".tsx")) == "user"
        assert extract_module_name("user.service.tsx") is None


class TestGroupByModule:
    def test_groups_in_first_seen_order(self) -> None:
        files = [
            SourceFile("src/user/user.service.ts", FileRole.SERVICE),
            SourceFile("src/app.module.ts", FileRole.MODULE),
            SourceFile("src/user/user.module.ts", FileRole.MODULE),
            SourceFile("scripts/seed.ts", FileRole.OTHER),
        ]
        grouped = group_by_module(files)
        assert list(grouped) == ["user", "app"]
        assert [f.path for f in grouped["user"]] == [
            "src/user/user.service.ts",
            "src/user/user.module.ts",
        ]

    def test_empty(self) -> None:
        assert group_by_module([]) == {}


class TestSourceFile:
    def test_name_and_extension(self) -> None:
        source = SourceFile("src/user/user.service.ts", FileRole.SERVICE)
        assert source.name == "user.service.ts"
        assert source.extension == ".ts"
