"""File roles from naming conventions and module grouping from path layout."""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass
from pathlib import PurePosixPath
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

# Distinguished module for the application root (src/app.module.ts).
APP_MODULE = "app"

# Directories whose children are modules (src/modules/<name>/...).
CONTAINER_DIRS: frozenset[str] = frozenset({"modules", "domains"})

# Project source root.
SOURCE_ROOT = "src"

# Categories recognised by the bare-filename fallback.
_FALLBACK_CATEGORIES = ("input", "response", "model", "module", "resolver", "service")

DEFAULT_EXTENSIONS: tuple[str, ...] = (".ts",)


class FileRole(enum.Enum):
    """Declared role of a source file, from its ``name.<category>.<ext>`` suffix."""

    INPUT = "input"
    RESPONSE = "response"
    MODEL = "model"
    ENTITY = "entity"
    REPOSITORY = "repository"
    MODULE = "module"
    RESOLVER = "resolver"
    SERVICE = "service"
    OTHER = "other"


# Checked in this order; the first matching category wins.
_ROLE_ORDER: tuple[FileRole, ...] = (
    FileRole.INPUT,
    FileRole.RESPONSE,
    FileRole.MODEL,
    FileRole.ENTITY,
    FileRole.REPOSITORY,
    FileRole.MODULE,
    FileRole.RESOLVER,
    FileRole.SERVICE,
)


@dataclass(frozen=True)
class SourceFile:
    """A discovered source file: root-relative POSIX path plus its role."""

    path: str
    role: FileRole

    @property
    def name(self) -> str:
        return PurePosixPath(self.path).name

    @property
    def extension(self) -> str:
        return PurePosixPath(self.path).suffix


def classify(path: str) -> FileRole:
    """Return the role of *path* from its literal two-part suffix.

    ``user.service.ts`` is a service; ``userinput.ts`` and ``module.ts`` are
    ``OTHER`` because they have no category segment.  Matching is
    case-sensitive.
    """
    parts = PurePosixPath(path).name.split(".")
    if len(parts) < 3 or not parts[0]:
        return FileRole.OTHER
    category = parts[-2]
    for role in _ROLE_ORDER:
        if category == role.value:
            return role
    return FileRole.OTHER


def _fallback_re(extensions: Iterable[str]) -> re.Pattern[str]:
    exts = "|".join(re.escape(ext.lstrip(".")) for ext in extensions)
    cats = "|".join(_FALLBACK_CATEGORIES)
    return re.compile(rf"^([a-z-]+)\.({cats})\.({exts})$")


def extract_module_name(
    path: str, extensions: Iterable[str] = DEFAULT_EXTENSIONS
) -> str | None:
    """Derive the logical module of *path*, or ``None`` if it belongs to none.

    Heuristics, in priority order:

    1. ``.../modules/<name>/...`` or ``.../domains/<name>/...``
    2. ``.../src/<name>/...``
    3. ``.../<name>/<name>.<category>.<ext>``
    4. a bare ``<name>.<category>.<ext>`` filename
    """
    parts = PurePosixPath(path).parts

    for i in range(len(parts) - 1):
        nxt = parts[i + 1]
        if parts[i] in CONTAINER_DIRS and "." not in nxt:
            return nxt

    for i in range(len(parts) - 1):
        nxt = parts[i + 1]
        if parts[i] == SOURCE_ROOT and nxt not in CONTAINER_DIRS and "." not in nxt:
            return nxt

    for i in range(len(parts) - 1):
        nxt = parts[i + 1]
        if "." in nxt and nxt.split(".", 1)[0] == parts[i]:
            return parts[i]

    match = _fallback_re(extensions).match(parts[-1]) if parts else None
    if match:
        return match.group(1)
    return None


def group_by_module(
    files: Iterable[SourceFile], extensions: Iterable[str] = DEFAULT_EXTENSIONS
) -> dict[str, list[SourceFile]]:
    """Partition *files* by module name; files without a module are dropped.

    Modules appear in order of their first file.
    """
    exts = tuple(extensions)
    modules: dict[str, list[SourceFile]] = {}
    for source in files:
        name = extract_module_name(source.path, exts)
        if name is None:
            continue
        modules.setdefault(name, []).append(source)
    return modules
