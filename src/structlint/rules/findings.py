"""Finding records, rule identifiers, and decorator vocabulary."""

from __future__ import annotations

from dataclasses import dataclass

# ---------------------------------------------------------------------------
# Severities
# ---------------------------------------------------------------------------

ERROR = "error"
WARNING = "warning"

# ---------------------------------------------------------------------------
# Rule identifiers
# ---------------------------------------------------------------------------

INPUT_LOCATION = "input-location"
RESPONSE_LOCATION = "response-location"
MODEL_LOCATION = "model-location"
ENTITY_FILE_NOT_ALLOWED = "entity-file-not-allowed"
MISSING_ENTITY_DECORATOR = "missing-entity-decorator"
MISSING_PRIMARY_COLUMN = "missing-primary-column"
MISSING_COLUMN_DECORATOR = "missing-column-decorator"
RESOLVER_CLASS = "resolver-class"
EMPTY_RESOLVER = "empty-resolver"
SERVICE_CLASS = "service-class"
MISSING_MODULE = "missing-module"
MODULE_NAMING = "module-naming"
MODULE_PATH = "module-path"
RESOLVER_LOCATION = "resolver-location"
MULTIPLE_ARGS_DECORATORS = "multiple-args-decorators"
EVENT_IN_RESOLVER = "event-in-resolver"
UNNECESSARY_VALIDATION = "unnecessary-validation"

RULE_SEVERITIES: dict[str, str] = {
    INPUT_LOCATION: ERROR,
    RESPONSE_LOCATION: ERROR,
    MODEL_LOCATION: ERROR,
    ENTITY_FILE_NOT_ALLOWED: ERROR,
    MISSING_ENTITY_DECORATOR: ERROR,
    MISSING_PRIMARY_COLUMN: ERROR,
    MISSING_COLUMN_DECORATOR: WARNING,
    RESOLVER_CLASS: ERROR,
    EMPTY_RESOLVER: WARNING,
    SERVICE_CLASS: ERROR,
    MISSING_MODULE: WARNING,
    MODULE_NAMING: WARNING,
    MODULE_PATH: WARNING,
    RESOLVER_LOCATION: ERROR,
    MULTIPLE_ARGS_DECORATORS: ERROR,
    EVENT_IN_RESOLVER: ERROR,
    UNNECESSARY_VALIDATION: ERROR,
}

ALL_RULES: frozenset[str] = frozenset(RULE_SEVERITIES)

# Rule family (configuration switch) -> rules it gates.
RULE_FAMILIES: dict[str, tuple[str, ...]] = {
    "check_input_files": (INPUT_LOCATION, UNNECESSARY_VALIDATION),
    "check_response_files": (RESPONSE_LOCATION,),
    "check_model_files": (MODEL_LOCATION,),
    "check_entity_files": (
        ENTITY_FILE_NOT_ALLOWED,
        MISSING_ENTITY_DECORATOR,
        MISSING_PRIMARY_COLUMN,
        MISSING_COLUMN_DECORATOR,
    ),
    "check_resolver_files": (RESOLVER_CLASS, EMPTY_RESOLVER),
    "check_service_files": (SERVICE_CLASS,),
    "check_module_naming": (MISSING_MODULE, MODULE_NAMING, MODULE_PATH),
    "check_resolver_endpoints": (
        RESOLVER_LOCATION,
        MULTIPLE_ARGS_DECORATORS,
        EVENT_IN_RESOLVER,
    ),
}

# ---------------------------------------------------------------------------
# Decorator vocabulary
# ---------------------------------------------------------------------------

INPUT_TYPE = "InputType"
OBJECT_TYPE = "ObjectType"
ENTITY = "Entity"
RESOLVER = "Resolver"
INJECTABLE = "Injectable"
FIELD = "Field"
ARGS = "Args"

COLUMN_DECORATORS: frozenset[str] = frozenset(
    {
        "Column",
        "PrimaryColumn",
        "PrimaryGeneratedColumn",
        "CreateDateColumn",
        "UpdateDateColumn",
        "DeleteDateColumn",
        "VersionColumn",
        "ObjectIdColumn",
        "Generated",
    }
)
PRIMARY_DECORATORS: frozenset[str] = frozenset(
    {"PrimaryColumn", "PrimaryGeneratedColumn", "ObjectIdColumn"}
)
RELATION_DECORATORS: frozenset[str] = frozenset(
    {"ManyToOne", "OneToMany", "OneToOne", "ManyToMany", "JoinColumn", "JoinTable", "RelationId"}
)
OPERATION_DECORATORS: frozenset[str] = frozenset({"Query", "Mutation", "Subscription"})
FIELD_RESOLVER_DECORATORS: frozenset[str] = frozenset({"ResolveField", "FieldResolver"})
ENDPOINT_DECORATORS: frozenset[str] = OPERATION_DECORATORS | FIELD_RESOLVER_DECORATORS
TYPE_VALIDATORS: frozenset[str] = frozenset(
    {"IsEnum", "IsString", "IsNumber", "IsBoolean", "IsInt", "IsArray", "IsObject", "IsDate"}
)
EVENT_METHODS: frozenset[str] = frozenset({"emit", "publish", "dispatchEvent", "publishEvent"})


@dataclass(frozen=True)
class Finding:
    """A single rule violation."""

    file: str  # root-relative path, or module name for module-level findings
    rule: str
    message: str
    severity: str  # "error" | "warning"
    line: int | None = None  # 1-based
    snippet: str | None = None

    @property
    def is_error(self) -> bool:
        return self.severity == ERROR

    def to_dict(self) -> dict[str, object]:
        return {
            "file": self.file,
            "line": self.line,
            "rule": self.rule,
            "message": self.message,
            "severity": self.severity,
            "snippet": self.snippet,
        }


def make_finding(rule: str, file: str, message: str, line: int | None = None) -> Finding:
    """Build a finding with the severity registered for *rule*."""
    return Finding(file=file, rule=rule, message=message, severity=RULE_SEVERITIES[rule], line=line)
