"""Structure rules: required classes per file role and NestJS module layout."""

from __future__ import annotations

from pathlib import PurePosixPath
from typing import TYPE_CHECKING

from structlint.rules.findings import (
    EMPTY_RESOLVER,
    ENDPOINT_DECORATORS,
    INJECTABLE,
    MISSING_MODULE,
    MODULE_NAMING,
    MODULE_PATH,
    RESOLVER,
    RESOLVER_CLASS,
    SERVICE_CLASS,
    Finding,
    make_finding,
)
from structlint.source.classifier import APP_MODULE, FileRole

if TYPE_CHECKING:
    from structlint.rules.context import ModuleContext
    from structlint.source.classifier import SourceFile

# Roles whose presence means the module needs a *.module.ts to wire them up.
_WIRED_ROLES = (FileRole.RESOLVER, FileRole.SERVICE, FileRole.MODEL)
_CONTROLLER_CATEGORY = "controller"


def _is_controller(source: SourceFile) -> bool:
    parts = source.name.split(".")
    return len(parts) >= 3 and parts[-2] == _CONTROLLER_CATEGORY


# ---------------------------------------------------------------------------
# Resolver / service files
# ---------------------------------------------------------------------------


def check_resolver_class(ctx: ModuleContext) -> list[Finding]:
    """Resolver files must declare a ``@Resolver()`` class."""
    findings: list[Finding] = []
    for source, parsed in ctx.declarations(ctx.with_role(FileRole.RESOLVER)):
        if not any(cls.has_decorator(RESOLVER) for cls in parsed.classes):
            findings.append(
                make_finding(
                    RESOLVER_CLASS,
                    source.path,
                    "Resolver files should contain a class decorated with @Resolver()",
                )
            )
    return findings


def check_empty_resolver(ctx: ModuleContext) -> list[Finding]:
    """Resolver files with a resolver class but no operation or field resolver."""
    findings: list[Finding] = []
    for source, parsed in ctx.declarations(ctx.with_role(FileRole.RESOLVER)):
        if not any(cls.has_decorator(RESOLVER) for cls in parsed.classes):
            continue
        if not any(m.has_decorator(*ENDPOINT_DECORATORS) for m in parsed.methods):
            findings.append(
                make_finding(
                    EMPTY_RESOLVER,
                    source.path,
                    "Resolver file does not contain any Query, Mutation, Subscription, "
                    "or Field resolvers",
                )
            )
    return findings


def check_service_class(ctx: ModuleContext) -> list[Finding]:
    """Service files need an ``@Injectable()`` class or a class named ``*Service``."""
    findings: list[Finding] = []
    for source, parsed in ctx.declarations(ctx.with_role(FileRole.SERVICE)):
        has_service = any(
            cls.has_decorator(INJECTABLE) or (cls.name or "").endswith("Service")
            for cls in parsed.classes
        )
        if not has_service:
            findings.append(
                make_finding(
                    SERVICE_CLASS,
                    source.path,
                    "Service files should contain a class decorated with @Injectable() "
                    "or a class name ending with Service",
                )
            )
    return findings


# ---------------------------------------------------------------------------
# Module definition files
# ---------------------------------------------------------------------------


def check_missing_module(ctx: ModuleContext) -> list[Finding]:
    """Modules with resolvers, services, controllers or models but no ``*.module.ts``.

    Reported against the module name rather than a file.
    """
    if ctx.module == APP_MODULE or ctx.with_role(FileRole.MODULE):
        return []
    wired = ctx.with_role(*_WIRED_ROLES) or [f for f in ctx.files if _is_controller(f)]
    if not wired:
        return []
    return [
        make_finding(
            MISSING_MODULE,
            ctx.module,
            f'Module "{ctx.module}" is missing a .module.ts file',
        )
    ]


def check_module_naming(ctx: ModuleContext) -> list[Finding]:
    """Module files must be named ``<module>.module.ts``."""
    if ctx.module == APP_MODULE:
        return []
    findings: list[Finding] = []
    expected = f"{ctx.module}.module"
    for source in ctx.with_role(FileRole.MODULE):
        stem = PurePosixPath(source.name).stem
        if stem != expected:
            findings.append(
                make_finding(
                    MODULE_NAMING,
                    source.path,
                    f'Module file should be named "{expected}{source.extension}", '
                    f'found "{stem}{source.extension}"',
                )
            )
    return findings


def check_module_path(ctx: ModuleContext) -> list[Finding]:
    """Module files must sit at ``<module>/<module>.module.ts``."""
    if ctx.module == APP_MODULE:
        return []
    findings: list[Finding] = []
    for source in ctx.with_role(FileRole.MODULE):
        expected = f"{ctx.module}/{ctx.module}.module{source.extension}"
        if source.path != expected and not source.path.endswith(f"/{expected}"):
            findings.append(
                make_finding(
                    MODULE_PATH,
                    source.path,
                    f'Module file should be at path ending with "{expected}", '
                    f'found at "{source.path}"',
                )
            )
    return findings
