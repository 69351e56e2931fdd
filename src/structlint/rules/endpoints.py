"""Resolver endpoint rules: argument binding and side effects in resolvers."""

from __future__ import annotations

from typing import TYPE_CHECKING

from structlint.rules.findings import (
    ARGS,
    EVENT_IN_RESOLVER,
    EVENT_METHODS,
    MULTIPLE_ARGS_DECORATORS,
    OPERATION_DECORATORS,
    Finding,
    make_finding,
)
from structlint.source.classifier import FileRole

if TYPE_CHECKING:
    from structlint.rules.context import ModuleContext
    from structlint.source.declarations import Declaration


def _args_bindings(method: Declaration) -> list[tuple[str, int]]:
    """Return ``(name, line)`` for every ``@Args`` marker, in parameter order."""
    bindings: list[tuple[str, int]] = []
    for param in method.parameters:
        for dec in param.decorators:
            if dec.name != ARGS:
                continue
            name = dec.string_arg(0) or param.name or "unknown"
            bindings.append((name, param.line))
    return bindings


def check_multiple_args(ctx: ModuleContext) -> list[Finding]:
    """Operations binding more than one ``@Args()`` parameter.

    Emits a summary at the method followed by one finding per bound
    parameter, in declaration order.
    """
    findings: list[Finding] = []
    for source, parsed in ctx.declarations(ctx.with_role(FileRole.RESOLVER)):
        for method in parsed.methods:
            if not method.has_decorator(*OPERATION_DECORATORS):
                continue
            bindings = _args_bindings(method)
            if len(bindings) <= 1:
                continue
            listed = ", ".join(f"@Args('{name}')" for name, _ in bindings)
            findings.append(
                make_finding(
                    MULTIPLE_ARGS_DECORATORS,
                    source.path,
                    "GraphQL endpoints should have maximum 1 @Args() decorator. "
                    f"Method '{method.name or 'unknown'}' has {len(bindings)} @Args() "
                    f"decorators ({listed}). When there are multiple arguments, "
                    "combine them into a single input type.",
                    method.line,
                )
            )
            findings.extend(
                make_finding(
                    MULTIPLE_ARGS_DECORATORS,
                    source.path,
                    f"Parameter '{name}' should be part of an input type "
                    "instead of using @Args() directly",
                    line,
                )
                for name, line in bindings
            )
    return findings


def check_event_in_resolver(ctx: ModuleContext) -> list[Finding]:
    """``*.emit()``/``*.publish()`` style calls made from resolver files."""
    findings: list[Finding] = []
    for source, parsed in ctx.declarations(ctx.with_role(FileRole.RESOLVER)):
        for call in parsed.calls:
            if call.method in EVENT_METHODS:
                findings.append(
                    make_finding(
                        EVENT_IN_RESOLVER,
                        source.path,
                        "Event publishing should only be done in service layer, not in "
                        f"resolvers. Move this.{call.method}() to a service method.",
                        call.line,
                    )
                )
    return findings
