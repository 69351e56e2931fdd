"""Persistence rules: entity placement and TypeORM column coverage in model files."""

from __future__ import annotations

from typing import TYPE_CHECKING

from structlint.rules.findings import (
    COLUMN_DECORATORS,
    ENTITY,
    ENTITY_FILE_NOT_ALLOWED,
    MISSING_COLUMN_DECORATOR,
    MISSING_ENTITY_DECORATOR,
    MISSING_PRIMARY_COLUMN,
    PRIMARY_DECORATORS,
    RELATION_DECORATORS,
    Finding,
    make_finding,
)
from structlint.source.classifier import FileRole

if TYPE_CHECKING:
    from collections.abc import Iterator

    from structlint.rules.context import ModuleContext, ProjectContext
    from structlint.source.classifier import SourceFile
    from structlint.source.declarations import Declaration

_PERSISTENCE_DECORATORS = COLUMN_DECORATORS | RELATION_DECORATORS


def _model_classes(ctx: ModuleContext) -> Iterator[tuple[SourceFile, Declaration]]:
    for source, parsed in ctx.declarations(ctx.with_role(FileRole.MODEL)):
        for cls in parsed.classes:
            yield source, cls


def _is_persisted(prop: Declaration) -> bool:
    return prop.has_decorator(*_PERSISTENCE_DECORATORS)


def check_entity_file_not_allowed(project: ProjectContext) -> list[Finding]:
    """Every ``*.entity.ts`` file is an error, whatever it contains."""
    return [
        make_finding(
            ENTITY_FILE_NOT_ALLOWED,
            source.path,
            f"Entity files (.entity{source.extension}) are not allowed. "
            f"TypeORM entities should be in .model{source.extension} files",
        )
        for source in project.files
        if source.role is FileRole.ENTITY
    ]


def check_missing_entity_decorator(ctx: ModuleContext) -> list[Finding]:
    """Model classes with column or relation markers but no ``@Entity``."""
    findings: list[Finding] = []
    for source, cls in _model_classes(ctx):
        if cls.has_decorator(ENTITY):
            continue
        if any(_is_persisted(prop) for prop in cls.properties):
            findings.append(
                make_finding(
                    MISSING_ENTITY_DECORATOR,
                    source.path,
                    f"Class '{cls.name or 'unknown'}' uses column or relation decorators "
                    "but is missing the @Entity() decorator",
                    cls.line,
                )
            )
    return findings


def check_missing_primary_column(ctx: ModuleContext) -> list[Finding]:
    """``@Entity`` classes with no primary key column.

    Classes that extend a base class are skipped; the key may be inherited.
    """
    findings: list[Finding] = []
    for source, cls in _model_classes(ctx):
        if not cls.has_decorator(ENTITY) or cls.extends:
            continue
        if not any(prop.has_decorator(*PRIMARY_DECORATORS) for prop in cls.properties):
            findings.append(
                make_finding(
                    MISSING_PRIMARY_COLUMN,
                    source.path,
                    "Entity must have @PrimaryColumn() or @PrimaryGeneratedColumn() decorator",
                    cls.line,
                )
            )
    return findings


def check_missing_column_decorator(ctx: ModuleContext) -> list[Finding]:
    """Entity properties that are neither persisted nor resolved by a field resolver."""
    findings: list[Finding] = []
    for source, cls in _model_classes(ctx):
        if not cls.has_decorator(ENTITY):
            continue
        computed = ctx.resolver_fields.get(cls.name or "", set())
        for prop in cls.properties:
            if not prop.name or prop.name == "constructor":
                continue
            if _is_persisted(prop) or prop.name in computed:
                continue
            findings.append(
                make_finding(
                    MISSING_COLUMN_DECORATOR,
                    source.path,
                    "Entity properties should have @Column() or relation decorator "
                    "for persistence (or be computed via resolver)",
                    prop.line,
                )
            )
    return findings
