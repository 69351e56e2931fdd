"""Placement rules: GraphQL and persistence markers must live in files of the matching role."""

from __future__ import annotations

from typing import TYPE_CHECKING

from structlint.rules.findings import (
    ENDPOINT_DECORATORS,
    ENTITY,
    FIELD,
    INPUT_LOCATION,
    INPUT_TYPE,
    MODEL_LOCATION,
    OBJECT_TYPE,
    RESOLVER_LOCATION,
    RESPONSE_LOCATION,
    TYPE_VALIDATORS,
    UNNECESSARY_VALIDATION,
    Finding,
    make_finding,
)
from structlint.source.classifier import FileRole

if TYPE_CHECKING:
    from structlint.rules.context import ModuleContext
    from structlint.source.declarations import Declaration

def is_response_class(cls: Declaration) -> bool:
    """A class whose name contains ``Response`` is a response type wherever it lives."""
    return "Response" in (cls.name or "")


def check_input_location(ctx: ModuleContext) -> list[Finding]:
    """``@InputType`` classes outside ``*.input.ts`` files."""
    findings: list[Finding] = []
    for source, parsed in ctx.declarations(ctx.without_role(FileRole.INPUT)):
        for cls in parsed.classes:
            if cls.has_decorator(INPUT_TYPE):
                findings.append(
                    make_finding(
                        INPUT_LOCATION,
                        source.path,
                        f"GraphQL input types should be in .input{source.extension} files, "
                        f"found in {source.name}",
                        cls.line,
                    )
                )
    return findings


def check_response_location(ctx: ModuleContext) -> list[Finding]:
    """``@ObjectType`` response classes outside ``*.response.ts`` files."""
    findings: list[Finding] = []
    for source, parsed in ctx.declarations(ctx.without_role(FileRole.RESPONSE)):
        for cls in parsed.classes:
            if cls.has_decorator(OBJECT_TYPE) and is_response_class(cls):
                findings.append(
                    make_finding(
                        RESPONSE_LOCATION,
                        source.path,
                        f"GraphQL response types should be in .response{source.extension} files, "
                        f"found in {source.name}",
                        cls.line,
                    )
                )
    return findings


def check_model_location(ctx: ModuleContext) -> list[Finding]:
    """``@Entity`` and non-response ``@ObjectType`` classes outside ``*.model.ts`` files.

    Each offending marker is reported separately, so a class carrying both
    yields two findings.
    """
    findings: list[Finding] = []
    for source, parsed in ctx.declarations(ctx.without_role(FileRole.MODEL)):
        target = f".model{source.extension}"
        for cls in parsed.classes:
            if cls.has_decorator(ENTITY):
                findings.append(
                    make_finding(
                        MODEL_LOCATION,
                        source.path,
                        f"TypeORM entities should be in {target} files, found in {source.name}",
                        cls.line,
                    )
                )
            if cls.has_decorator(OBJECT_TYPE) and not is_response_class(cls):
                findings.append(
                    make_finding(
                        MODEL_LOCATION,
                        source.path,
                        f"GraphQL object types (non-response) should be in {target} files, "
                        f"found in {source.name}",
                        cls.line,
                    )
                )
    return findings


def check_resolver_location(ctx: ModuleContext) -> list[Finding]:
    """Query/Mutation/Subscription/field-resolver methods outside ``*.resolver.ts`` files."""
    findings: list[Finding] = []
    for source, parsed in ctx.declarations(ctx.without_role(FileRole.RESOLVER)):
        for method in parsed.methods:
            if method.has_decorator(*ENDPOINT_DECORATORS):
                findings.append(
                    make_finding(
                        RESOLVER_LOCATION,
                        source.path,
                        "GraphQL operations (Query, Mutation, Subscription, Field resolvers) "
                        f"should only be in .resolver{source.extension} files",
                        method.line,
                    )
                )
    return findings


def check_unnecessary_validation(ctx: ModuleContext) -> list[Finding]:
    """Type validators on ``@Field`` properties of ``@InputType`` classes.

    The GraphQL layer already enforces scalar types, so ``@IsString`` and
    friends are redundant there.  Reported at the validator's own line.
    """
    findings: list[Finding] = []
    for source, parsed in ctx.declarations(ctx.with_role(FileRole.INPUT)):
        for cls in parsed.classes:
            if not cls.has_decorator(INPUT_TYPE):
                continue
            for prop in cls.properties:
                if not prop.has_decorator(FIELD):
                    continue
                for dec in prop.decorators:
                    if dec.name not in TYPE_VALIDATORS:
                        continue
                    findings.append(
                        make_finding(
                            UNNECESSARY_VALIDATION,
                            source.path,
                            f"@{dec.name} validation is unnecessary in GraphQL input types. "
                            "Type validation is enforced by the GraphQL layer. "
                            f"Remove this decorator for property '{prop.name or 'unknown'}'.",
                            dec.line,
                        )
                    )
    return findings
