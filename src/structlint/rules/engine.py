"""Rule registry, enablement, and evaluation over modules and the whole project."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from structlint.rules import endpoints, entities, placement, structure
from structlint.rules.findings import (
    ALL_RULES,
    EMPTY_RESOLVER,
    ENTITY_FILE_NOT_ALLOWED,
    EVENT_IN_RESOLVER,
    INPUT_LOCATION,
    MISSING_COLUMN_DECORATOR,
    MISSING_ENTITY_DECORATOR,
    MISSING_MODULE,
    MISSING_PRIMARY_COLUMN,
    MODEL_LOCATION,
    MODULE_NAMING,
    MODULE_PATH,
    MULTIPLE_ARGS_DECORATORS,
    RESOLVER_CLASS,
    RESOLVER_LOCATION,
    RESPONSE_LOCATION,
    RULE_FAMILIES,
    SERVICE_CLASS,
    UNNECESSARY_VALIDATION,
)

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Mapping

    from structlint.rules.context import ModuleContext, ProjectContext
    from structlint.rules.findings import Finding

    ModuleRule = Callable[[ModuleContext], list[Finding]]
    ProjectRule = Callable[[ProjectContext], list[Finding]]

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------

# Evaluated once per run over every enumerated file.
PROJECT_RULES: dict[str, ProjectRule] = {
    ENTITY_FILE_NOT_ALLOWED: entities.check_entity_file_not_allowed,
}

# Evaluated once per module, in this order.
MODULE_RULES: dict[str, ModuleRule] = {
    MODEL_LOCATION: placement.check_model_location,
    INPUT_LOCATION: placement.check_input_location,
    RESPONSE_LOCATION: placement.check_response_location,
    MISSING_ENTITY_DECORATOR: entities.check_missing_entity_decorator,
    MISSING_PRIMARY_COLUMN: entities.check_missing_primary_column,
    MISSING_COLUMN_DECORATOR: entities.check_missing_column_decorator,
    UNNECESSARY_VALIDATION: placement.check_unnecessary_validation,
    RESOLVER_CLASS: structure.check_resolver_class,
    EMPTY_RESOLVER: structure.check_empty_resolver,
    SERVICE_CLASS: structure.check_service_class,
    MISSING_MODULE: structure.check_missing_module,
    MODULE_NAMING: structure.check_module_naming,
    MODULE_PATH: structure.check_module_path,
    RESOLVER_LOCATION: placement.check_resolver_location,
    MULTIPLE_ARGS_DECORATORS: endpoints.check_multiple_args,
    EVENT_IN_RESOLVER: endpoints.check_event_in_resolver,
}

_FAMILY_OF: dict[str, str] = {
    rule: family for family, rules in RULE_FAMILIES.items() for rule in rules
}


def family_of(rule: str) -> str:
    """Return the family switch that gates *rule*."""
    return _FAMILY_OF[rule]


# ---------------------------------------------------------------------------
# Enablement
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class RuleSet:
    """Which rules run: family switches plus individually disabled rule ids."""

    families: Mapping[str, bool] = field(default_factory=dict)
    disabled: frozenset[str] = frozenset()

    def is_enabled(self, rule: str) -> bool:
        if rule in self.disabled:
            return False
        return self.families.get(family_of(rule), True)

    def enabled_rules(self) -> list[str]:
        return sorted(r for r in ALL_RULES if self.is_enabled(r))

    def without(self, rules: Iterable[str]) -> RuleSet:
        """Return a copy with *rules* additionally disabled."""
        extra = frozenset(rules)
        unknown = sorted(extra - ALL_RULES)
        if unknown:
            msg = f"unknown rule id(s): {', '.join(unknown)}"
            raise ValueError(msg)
        return RuleSet(families=dict(self.families), disabled=self.disabled | extra)

    @classmethod
    def from_mapping(cls, switches: Mapping[str, bool]) -> RuleSet:
        """Build from ``{family_or_rule_id: enabled}``.

        Raises
        ------
        ValueError
            On a key that is neither a family nor a rule id, or a non-bool value.
        """
        families: dict[str, bool] = {}
        disabled: set[str] = set()
        for key, enabled in switches.items():
            if not isinstance(enabled, bool):
                msg = f"switch '{key}' must be true or false, got {enabled!r}"
                raise ValueError(msg)
            if key in RULE_FAMILIES:
                families[key] = enabled
            elif key in ALL_RULES:
                if not enabled:
                    disabled.add(key)
            else:
                msg = f"unknown rule family or rule id: '{key}'"
                raise ValueError(msg)
        return cls(families=families, disabled=frozenset(disabled))


# ---------------------------------------------------------------------------
# Evaluation
# ---------------------------------------------------------------------------


def evaluate_project(project: ProjectContext, rules: RuleSet) -> list[Finding]:
    """Run the enabled whole-project rules."""
    findings: list[Finding] = []
    for rule_id, check in PROJECT_RULES.items():
        if rules.is_enabled(rule_id):
            findings.extend(check(project))
    return findings


def evaluate_module(ctx: ModuleContext, rules: RuleSet) -> list[Finding]:
    """Run the enabled module rules over one module.

    Disabled rules are skipped entirely, never filtered after the fact.
    """
    findings: list[Finding] = []
    for rule_id, check in MODULE_RULES.items():
        if not rules.is_enabled(rule_id):
            continue
        found = check(ctx)
        if found:
            logger.debug("Module %s: %s produced %d finding(s)", ctx.module, rule_id, len(found))
        findings.extend(found)
    return findings
