"""Tree-sitter front end: grammar loading and generic syntax-tree helpers."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from tree_sitter import Language, Parser

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from tree_sitter import Node as TSNode
    from tree_sitter import Tree

logger = logging.getLogger(__name__)

# Node types that hold a class body.
CLASS_TYPES: frozenset[str] = frozenset({"class_declaration", "abstract_class_declaration"})

# Nodes skipped when walking back from a class member to its decorators.
_TRIVIA_TYPES: frozenset[str] = frozenset({"comment"})


@dataclass(frozen=True)
class LangConfig:
    """Tree-sitter configuration for a TypeScript dialect."""

    name: str
    language: Language


# ---- Language loaders (lazy, handle ImportError) ----


def _load_typescript() -> LangConfig:
    import tree_sitter_typescript as tstypescript

    return LangConfig(name="typescript", language=Language(tstypescript.language_typescript()))


def _load_tsx() -> LangConfig:
    import tree_sitter_typescript as tstypescript

    return LangConfig(name="tsx", language=Language(tstypescript.language_tsx()))


# Extension -> loader function mapping.
_EXTENSION_LOADERS: dict[str, Callable[[], LangConfig]] = {
    ".ts": _load_typescript,
    ".tsx": _load_tsx,
}

# Cache for loaded languages (None means "tried and failed / unsupported").
_LANG_CACHE: dict[str, LangConfig | None] = {}


def get_lang_config(extension: str) -> LangConfig | None:
    """Get language config for a file extension, or ``None`` if unsupported/unavailable."""
    if extension in _LANG_CACHE:
        return _LANG_CACHE[extension]

    loader = _EXTENSION_LOADERS.get(extension)
    if loader is None:
        _LANG_CACHE[extension] = None
        return None

    try:
        config = loader()
    except ImportError:
        logger.warning("tree-sitter grammar for %s is not installed", extension)
        _LANG_CACHE[extension] = None
        return None

    _LANG_CACHE[extension] = config
    return config


def supported_extensions() -> frozenset[str]:
    """Return the set of file extensions the extractor knows how to parse."""
    return frozenset(_EXTENSION_LOADERS)


def clear_cache() -> None:
    """Clear the language config cache (useful for testing)."""
    _LANG_CACHE.clear()


def parse(source: str, extension: str) -> Tree | None:
    """Parse *source* with the grammar registered for *extension*.

    Returns ``None`` when no grammar is available.  Syntax errors do not
    fail the parse: tree-sitter recovers and marks them with ``ERROR`` nodes.
    """
    config = get_lang_config(extension)
    if config is None:
        return None
    parser = Parser(config.language)
    return parser.parse(source.encode("utf-8"))


# ---------------------------------------------------------------------------
# Traversal helpers
# ---------------------------------------------------------------------------


def node_text(node: TSNode | None) -> str:
    """Safely decode tree-sitter node text."""
    if node is None or not node.text:
        return ""
    return node.text.decode("utf-8")


def get_line(node: TSNode) -> int:
    """Return the 1-based line where *node* starts."""
    # tree-sitter uses 0-based rows; we want 1-based lines.
    return node.start_point.row + 1


def visit(node: TSNode, visitor: Callable[[TSNode], None]) -> None:
    """Invoke *visitor* on *node* and every descendant, in pre-order."""
    stack = [node]
    while stack:
        current = stack.pop()
        visitor(current)
        stack.extend(reversed(current.children))


def iter_nodes(node: TSNode, types: Iterable[str]) -> list[TSNode]:
    """Collect descendants of *node* (inclusive) whose type is in *types*, in pre-order."""
    wanted = frozenset(types)
    found: list[TSNode] = []

    def _collect(current: TSNode) -> None:
        if current.type in wanted:
            found.append(current)

    visit(node, _collect)
    return found


def _own_decorators(node: TSNode) -> list[TSNode]:
    return [child for child in node.children if child.type == "decorator"]


def _preceding_decorators(node: TSNode) -> list[TSNode]:
    """Decorators written as siblings right before *node* (TypeScript class members)."""
    collected: list[TSNode] = []
    sibling = node.prev_sibling
    while sibling is not None and (sibling.type == "decorator" or sibling.type in _TRIVIA_TYPES):
        if sibling.type == "decorator":
            collected.append(sibling)
        sibling = sibling.prev_sibling
    collected.reverse()
    return collected


def get_decorators(node: TSNode) -> list[TSNode]:
    """Return the decorator nodes attached to *node*, in source order.

    Depending on where they are written, decorators are either children of
    the declaration, siblings preceding a method inside a class body, or
    children of the ``export`` statement wrapping a class.
    """
    decorators: list[TSNode] = []
    parent = node.parent
    if parent is not None:
        if parent.type == "export_statement" and node.type in CLASS_TYPES:
            decorators.extend(_own_decorators(parent))
        elif parent.type == "class_body":
            decorators.extend(_preceding_decorators(node))
    decorators.extend(_own_decorators(node))
    return decorators


def decorator_expression(decorator: TSNode) -> TSNode | None:
    """Return the expression following ``@`` in a decorator."""
    for child in decorator.named_children:
        if child.type not in _TRIVIA_TYPES:
            return child
    return None


def get_decorator_name(decorator: TSNode) -> str:
    """Resolve ``@Name`` and ``@Name(...)`` to ``Name``; other forms give ``""``."""
    expression = decorator_expression(decorator)
    if expression is None:
        return ""
    if expression.type == "identifier":
        return node_text(expression)
    if expression.type == "call_expression":
        function = expression.child_by_field_name("function")
        if function is not None and function.type == "identifier":
            return node_text(function)
    return ""


def get_call_arguments(decorator: TSNode) -> list[TSNode]:
    """Return the argument expressions of a call-form decorator (empty otherwise)."""
    expression = decorator_expression(decorator)
    if expression is None or expression.type != "call_expression":
        return []
    arguments = expression.child_by_field_name("arguments")
    if arguments is None:
        return []
    return [arg for arg in arguments.named_children if arg.type not in _TRIVIA_TYPES]
