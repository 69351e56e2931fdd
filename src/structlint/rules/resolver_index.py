"""Resolver field pre-pass: entity name -> fields computed by field resolvers."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from structlint.rules.findings import FIELD_RESOLVER_DECORATORS, RESOLVER

if TYPE_CHECKING:
    from collections.abc import Iterable

    from structlint.source.declarations import Declaration, ParsedFile

_RESOLVER_SUFFIX_RE = re.compile(r"Resolver$")


def _entity_name(cls: Declaration) -> str:
    """Target entity of a resolver class.

    ``@Resolver(() => User)`` and ``@Resolver(User)`` name it directly;
    otherwise ``UserResolver`` resolves ``User``.
    """
    marker = cls.find_decorator(RESOLVER)
    if marker is not None and marker.arguments:
        first = marker.arguments[0]
        if first.kind in ("thunk", "identifier") and first.value:
            return first.value
    return _RESOLVER_SUFFIX_RE.sub("", cls.name or "")


def _field_names(method: Declaration) -> list[str]:
    names: list[str] = []
    for dec in method.decorators:
        if dec.name not in FIELD_RESOLVER_DECORATORS:
            continue
        field_name = dec.string_arg(0)
        if field_name is None and len(dec.arguments) > 1:
            options = dec.arguments[1]
            named = options.properties.get("name") if options.kind == "object" else None
            if named is not None and named.kind == "string":
                field_name = named.value
        if field_name is None:
            field_name = method.name
        if field_name:
            names.append(field_name)
    return names


def collect_resolver_fields(parsed_files: Iterable[ParsedFile]) -> dict[str, set[str]]:
    """Build the computed-field index from resolver classes in *parsed_files*.

    An entry exists only for entities with at least one field resolver.
    """
    index: dict[str, set[str]] = {}
    for parsed in parsed_files:
        for cls in parsed.classes:
            if not cls.has_decorator(RESOLVER):
                continue
            fields: set[str] = set()
            for method in cls.methods:
                fields.update(_field_names(method))
            entity = _entity_name(cls)
            if entity and fields:
                index.setdefault(entity, set()).update(fields)
    return index
