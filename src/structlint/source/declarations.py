"""Declaration extraction: classes, members and decorators from TypeScript sources."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from structlint.source.ts_parser import (
    CLASS_TYPES,
    get_call_arguments,
    get_decorator_name,
    get_decorators,
    get_line,
    iter_nodes,
    node_text,
    parse,
)

if TYPE_CHECKING:
    from tree_sitter import Node as TSNode

logger = logging.getLogger(__name__)

# Class member node types, mapped to declaration kinds.
_MEMBER_KINDS: dict[str, str] = {
    "method_definition": "method",
    "public_field_definition": "property",
    "field_definition": "property",
}

_PARAMETER_TYPES: frozenset[str] = frozenset({"required_parameter", "optional_parameter"})


@dataclass(frozen=True)
class Argument:
    """A decorator argument reduced to what the rules need."""

    kind: str  # string | identifier | thunk | object | other
    value: str | None = None  # literal text, identifier, or thunk target
    properties: dict[str, Argument] = field(default_factory=dict)


@dataclass(frozen=True)
class Decorator:
    """A decorator marker: ``@Name`` or ``@Name(args...)``."""

    name: str
    line: int  # 1-based
    arguments: tuple[Argument, ...] = ()

    def string_arg(self, index: int = 0) -> str | None:
        """Return positional argument *index* if it is a string literal."""
        if index < len(self.arguments) and self.arguments[index].kind == "string":
            return self.arguments[index].value
        return None


@dataclass(frozen=True)
class Declaration:
    """A class, method, property, or parameter with its decorators."""

    kind: str  # class | method | property | parameter
    name: str | None
    line: int  # 1-based, first line including decorators
    decorators: tuple[Decorator, ...] = ()
    members: tuple[Declaration, ...] = ()
    parameters: tuple[Declaration, ...] = ()
    extends: str | None = None

    def decorator_names(self) -> list[str]:
        return [d.name for d in self.decorators]

    def has_decorator(self, *names: str) -> bool:
        return any(d.name in names for d in self.decorators)

    def find_decorator(self, name: str) -> Decorator | None:
        for dec in self.decorators:
            if dec.name == name:
                return dec
        return None

    @property
    def methods(self) -> list[Declaration]:
        return [m for m in self.members if m.kind == "method"]

    @property
    def properties(self) -> list[Declaration]:
        return [m for m in self.members if m.kind == "property"]


@dataclass(frozen=True)
class CallSite:
    """A member call such as ``this.events.emit(...)``."""

    receiver: str
    method: str
    line: int


@dataclass(frozen=True)
class ParsedFile:
    """Everything the rules read from one source file."""

    path: str
    classes: tuple[Declaration, ...] = ()
    calls: tuple[CallSite, ...] = ()

    @property
    def methods(self) -> list[Declaration]:
        return [m for cls in self.classes for m in cls.methods]


# ---------------------------------------------------------------------------
# Node -> declaration conversion
# ---------------------------------------------------------------------------


def _strip_quotes(text: str) -> str:
    if len(text) >= 2 and text[0] == text[-1] and text[0] in "'\"`":
        return text[1:-1]
    return text


def _property_name(node: TSNode | None) -> str | None:
    if node is None:
        return None
    text = node_text(node)
    if node.type == "string":
        return _strip_quotes(text)
    return text or None


def _parse_argument(node: TSNode) -> Argument:
    if node.type == "string":
        return Argument(kind="string", value=_strip_quotes(node_text(node)))
    if node.type == "identifier":
        return Argument(kind="identifier", value=node_text(node))
    if node.type == "arrow_function":
        body = node.child_by_field_name("body")
        target = node_text(body) if body is not None and body.type == "identifier" else None
        return Argument(kind="thunk", value=target)
    if node.type == "object":
        props: dict[str, Argument] = {}
        for pair in node.named_children:
            if pair.type != "pair":
                continue
            key = _property_name(pair.child_by_field_name("key"))
            value = pair.child_by_field_name("value")
            if key is not None and value is not None:
                props[key] = _parse_argument(value)
        return Argument(kind="object", properties=props)
    return Argument(kind="other", value=node_text(node) or None)


def _build_decorators(node: TSNode) -> tuple[Decorator, ...]:
    return tuple(
        Decorator(
            name=get_decorator_name(dec),
            line=get_line(dec),
            arguments=tuple(_parse_argument(arg) for arg in get_call_arguments(dec)),
        )
        for dec in get_decorators(node)
    )


def _first_line(node: TSNode, decorators: tuple[Decorator, ...]) -> int:
    return min([get_line(node), *(d.line for d in decorators)])


def _build_parameter(node: TSNode) -> Declaration:
    decorators = _build_decorators(node)
    pattern = node.child_by_field_name("pattern")
    name = node_text(pattern) if pattern is not None and pattern.type == "identifier" else None
    return Declaration(
        kind="parameter",
        name=name,
        line=_first_line(node, decorators),
        decorators=decorators,
    )


def _build_member(node: TSNode, kind: str) -> Declaration:
    decorators = _build_decorators(node)
    parameters: tuple[Declaration, ...] = ()
    if kind == "method":
        params_node = node.child_by_field_name("parameters")
        if params_node is not None:
            parameters = tuple(
                _build_parameter(p) for p in params_node.named_children if p.type in _PARAMETER_TYPES
            )
    return Declaration(
        kind=kind,
        name=_property_name(node.child_by_field_name("name")),
        line=_first_line(node, decorators),
        decorators=decorators,
        parameters=parameters,
    )


def _heritage(node: TSNode) -> str | None:
    for child in node.children:
        if child.type != "class_heritage":
            continue
        for clause in child.named_children:
            if clause.type == "extends_clause":
                value = clause.child_by_field_name("value")
                return node_text(value) if value is not None else node_text(clause)
    return None


def _build_class(node: TSNode) -> Declaration:
    decorators = _build_decorators(node)
    members: list[Declaration] = []
    body = node.child_by_field_name("body")
    if body is not None:
        for child in body.named_children:
            kind = _MEMBER_KINDS.get(child.type)
            if kind is not None:
                members.append(_build_member(child, kind))
    return Declaration(
        kind="class",
        name=_property_name(node.child_by_field_name("name")),
        line=_first_line(node, decorators),
        decorators=decorators,
        members=tuple(members),
        extends=_heritage(node),
    )


def _build_call(node: TSNode) -> CallSite | None:
    function = node.child_by_field_name("function")
    if function is None or function.type != "member_expression":
        return None
    prop = function.child_by_field_name("property")
    if prop is None:
        return None
    return CallSite(
        receiver=node_text(function.child_by_field_name("object")),
        method=node_text(prop),
        line=get_line(node),
    )


# ---------------------------------------------------------------------------
# Entry points
# ---------------------------------------------------------------------------


def extract_from_source(source: str, path: str, extension: str = ".ts") -> ParsedFile | None:
    """Extract declarations from in-memory *source*.

    Returns ``None`` when no grammar is available for *extension*.
    """
    tree = parse(source, extension)
    if tree is None:
        return None
    root = tree.root_node
    classes = tuple(_build_class(n) for n in iter_nodes(root, CLASS_TYPES))
    calls = tuple(
        call for call in (_build_call(n) for n in iter_nodes(root, ("call_expression",))) if call
    )
    return ParsedFile(path=path, classes=classes, calls=calls)


def extract_declarations(file_path: Path, rel_path: str | None = None) -> ParsedFile | None:
    """Read and parse *file_path*.

    Returns ``None`` when the file cannot be read or decoded, or when no
    grammar is available for its extension.
    """
    file_path = Path(file_path)
    try:
        content = file_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        logger.debug("Cannot read file: %s", file_path)
        return None

    return extract_from_source(content, rel_path or file_path.as_posix(), file_path.suffix)
