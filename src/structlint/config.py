"""Validator configuration: parse and validate ``.structlint.yml``."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

import yaml

from structlint.rules.engine import RuleSet
from structlint.source.classifier import DEFAULT_EXTENSIONS
from structlint.source.discovery import DEFAULT_IGNORE_FILE
from structlint.source.ts_parser import supported_extensions

if TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

CONFIG_FILENAME = ".structlint.yml"
SUPPORTED_CONFIG_VERSIONS: frozenset[int] = frozenset({1})
_KNOWN_KEYS: frozenset[str] = frozenset(
    {"version", "rules", "disable", "ignore", "ignore_file", "extensions"}
)

# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class ConfigError(Exception):
    """Raised when the configuration file is present but invalid."""


# ---------------------------------------------------------------------------
# Data classes
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ValidatorConfig:
    """Everything a validation run needs besides the root path."""

    rules: RuleSet = field(default_factory=RuleSet)
    ignore: tuple[str, ...] = ()
    ignore_file: str | None = DEFAULT_IGNORE_FILE
    extensions: tuple[str, ...] = DEFAULT_EXTENSIONS


# ---------------------------------------------------------------------------
# YAML parsing
# ---------------------------------------------------------------------------


def _string_list(data: dict[str, Any], key: str) -> tuple[str, ...]:
    raw = data.get(key, [])
    if raw is None:
        return ()
    if not isinstance(raw, list) or not all(isinstance(item, str) for item in raw):
        msg = f"{CONFIG_FILENAME}: '{key}' must be a list of strings"
        raise ValueError(msg)
    return tuple(raw)


def parse_config(data: object) -> ValidatorConfig:
    """Validate a decoded YAML document and build a :class:`ValidatorConfig`.

    Raises ``ValueError`` on schema errors.
    """
    if data is None:
        return ValidatorConfig()
    if not isinstance(data, dict):
        msg = f"{CONFIG_FILENAME} must be a YAML mapping"
        raise ValueError(msg)

    unknown = sorted(set(data) - _KNOWN_KEYS)
    if unknown:
        msg = f"{CONFIG_FILENAME}: unknown key(s): {', '.join(map(str, unknown))}"
        raise ValueError(msg)

    version = data.get("version", 1)
    if version not in SUPPORTED_CONFIG_VERSIONS:
        expected = sorted(SUPPORTED_CONFIG_VERSIONS)
        msg = f"{CONFIG_FILENAME}: unsupported version {version}, expected one of {expected}"
        raise ValueError(msg)

    switches = data.get("rules") or {}
    if not isinstance(switches, dict):
        msg = f"{CONFIG_FILENAME}: 'rules' must be a mapping of rule family to true/false"
        raise ValueError(msg)
    disabled = _string_list(data, "disable")
    try:
        rules = RuleSet.from_mapping(switches).without(disabled)
    except ValueError as exc:
        msg = f"{CONFIG_FILENAME}: {exc}"
        raise ValueError(msg) from exc

    ignore_file = data.get("ignore_file", DEFAULT_IGNORE_FILE)
    if ignore_file is not None and not isinstance(ignore_file, str):
        msg = f"{CONFIG_FILENAME}: 'ignore_file' must be a string or null"
        raise ValueError(msg)

    extensions = _string_list(data, "extensions") or DEFAULT_EXTENSIONS
    supported = supported_extensions()
    for ext in extensions:
        if ext not in supported:
            msg = (
                f"{CONFIG_FILENAME}: unsupported extension '{ext}', "
                f"must be one of {sorted(supported)}"
            )
            raise ValueError(msg)

    return ValidatorConfig(
        rules=rules,
        ignore=_string_list(data, "ignore"),
        ignore_file=ignore_file,
        extensions=extensions,
    )


def load_config(config_path: Path) -> ValidatorConfig:
    """Read and validate *config_path*.

    Raises ``ValueError`` on schema errors and ``OSError`` when unreadable.
    """
    with config_path.open("r", encoding="utf-8") as fh:
        try:
            data = yaml.safe_load(fh)
        except yaml.YAMLError as exc:
            msg = f"{CONFIG_FILENAME}: invalid YAML: {exc}"
            raise ValueError(msg) from exc
    return parse_config(data)


def find_config(root: Path) -> Path | None:
    """Return ``root/.structlint.yml`` if it exists."""
    candidate = root / CONFIG_FILENAME
    return candidate if candidate.is_file() else None


def resolve_config(root: Path, config_path: Path | None = None) -> ValidatorConfig:
    """Load the explicit or discovered configuration, or the defaults.

    Raises
    ------
    ConfigError
        When the configuration file is unreadable or invalid.
    """
    path = config_path if config_path is not None else find_config(root)
    if path is None:
        return ValidatorConfig()
    try:
        config = load_config(path)
    except (OSError, ValueError) as exc:
        msg = f"Invalid configuration: {exc}"
        raise ConfigError(msg) from exc
    logger.debug("Loaded configuration from %s", path)
    return config
