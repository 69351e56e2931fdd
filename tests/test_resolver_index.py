"""Tests for structlint.rules.resolver_index — computed-field pre-pass."""

from __future__ import annotations

from structlint.rules.resolver_index import collect_resolver_fields
from structlint.source.declarations import ParsedFile, extract_from_source


def _parse(source: str, path: str = "src/user/user.resolver.ts") -> ParsedFile:
    parsed = extract_from_source(source, path)
    assert parsed is not None
    return parsed


class TestCollectResolverFields:
    def test_thunk_target_and_method_name(self) -> None:
        parsed = _parse(
            "@Resolver(() => User)\n"
            "export class UserFieldsResolver {\n"
            "  @ResolveField()\n"
            "  fullName(@Parent() user: User) { return ''; }\n"
            "}\n"
        )
        assert collect_resolver_fields([parsed]) == {"User": {"fullName"}}

    def test_identifier_target(self) -> None:
        parsed = _parse(
            "@Resolver(Order)\n"
            "export class Things {\n"
            "  @ResolveField()\n"
            "  total() { return 0; }\n"
            "}\n"
        )
        assert collect_resolver_fields([parsed]) == {"Order": {"total"}}

    def test_class_name_fallback(self) -> None:
        parsed = _parse(
            "@Resolver()\n"
            "export class AccountResolver {\n"
            "  @FieldResolver()\n"
            "  balance() { return 0; }\n"
            "}\n"
        )
        assert collect_resolver_fields([parsed]) == {"Account": {"balance"}}

    def test_explicit_string_name(self) -> None:
        parsed = _parse(
            "@Resolver(() => User)\n"
            "export class UserResolver {\n"
            "  @ResolveField('avatarUrl')\n"
            "  resolveAvatar() { return ''; }\n"
            "}\n"
        )
        assert collect_resolver_fields([parsed]) == {"User": {"avatarUrl"}}

    def test_name_option(self) -> None:
        parsed = _parse(
            "@Resolver(() => User)\n"
            "export class UserResolver {\n"
            "  @ResolveField(() => String, { name: 'initials' })\n"
            "  getInitials() { return ''; }\n"
            "}\n"
        )
        assert collect_resolver_fields([parsed]) == {"User": {"initials"}}

    def test_no_field_resolvers_means_no_entry(self) -> None:
        parsed = _parse(
            "@Resolver(() => User)\n"
            "export class UserResolver {\n"
            "  @Query(() => User)\n"
            "  user() { return null; }\n"
            "}\n"
        )
        assert collect_resolver_fields([parsed]) == {}

    def test_non_resolver_class_ignored(self) -> None:
        parsed = _parse(
            "export class Helper {\n  @ResolveField()\n  x() { return 1; }\n}\n"
        )
        assert collect_resolver_fields([parsed]) == {}

    def test_merges_across_files(self) -> None:
        first = _parse(
            "@Resolver(() => User)\nexport class A {\n  @ResolveField()\n  a() {}\n}\n"
        )
        second = _parse(
            "@Resolver(() => User)\nexport class B {\n  @ResolveField()\n  b() {}\n}\n",
            "src/user/user-extra.resolver.ts",
        )
        assert collect_resolver_fields([first, second]) == {"User": {"a", "b"}}

    def test_empty(self) -> None:
        assert collect_resolver_fields([]) == {}
