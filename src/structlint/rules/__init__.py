"""Rules domain — findings, resolver field index, rule registry and evaluation."""

from structlint.rules.context import ModuleContext, ProjectContext
from structlint.rules.engine import (
    MODULE_RULES,
    PROJECT_RULES,
    RuleSet,
    evaluate_module,
    evaluate_project,
    family_of,
)
from structlint.rules.findings import (
    ALL_RULES,
    ERROR,
    RULE_FAMILIES,
    RULE_SEVERITIES,
    WARNING,
    Finding,
    make_finding,
)
from structlint.rules.resolver_index import collect_resolver_fields

__all__ = [
    "ALL_RULES",
    "ERROR",
    "MODULE_RULES",
    "PROJECT_RULES",
    "RULE_FAMILIES",
    "RULE_SEVERITIES",
    "WARNING",
    "Finding",
    "ModuleContext",
    "ProjectContext",
    "RuleSet",
    "collect_resolver_fields",
    "evaluate_module",
    "evaluate_project",
    "family_of",
    "make_finding",
]
