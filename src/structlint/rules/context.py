"""Inputs handed to every rule: one module, or the whole project."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator, Mapping

    from structlint.source.classifier import FileRole, SourceFile
    from structlint.source.declarations import ParsedFile


@dataclass(frozen=True)
class ModuleContext:
    """Read-only view of one module for module-scoped rules.

    ``parsed`` maps a root-relative path to its declarations, or ``None``
    when the file could not be read or parsed.  Such files are still part
    of ``files`` but never yield declaration-based findings.
    """

    module: str
    files: tuple[SourceFile, ...]
    parsed: Mapping[str, ParsedFile | None] = field(default_factory=dict)
    resolver_fields: Mapping[str, set[str]] = field(default_factory=dict)

    def with_role(self, *roles: FileRole) -> list[SourceFile]:
        return [f for f in self.files if f.role in roles]

    def without_role(self, *roles: FileRole) -> list[SourceFile]:
        return [f for f in self.files if f.role not in roles]

    def declarations(self, files: list[SourceFile]) -> Iterator[tuple[SourceFile, ParsedFile]]:
        """Yield ``(file, parsed)`` for each of *files* that parsed."""
        for source in files:
            parsed = self.parsed.get(source.path)
            if parsed is not None:
                yield source, parsed


@dataclass(frozen=True)
class ProjectContext:
    """Every enumerated file, grouped or not, for whole-project rules."""

    files: tuple[SourceFile, ...]
