"""Source discovery: walk the project root honoring built-in and ignore-file exclusions."""

from __future__ import annotations

import functools
import logging
import os
import re
from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import TYPE_CHECKING

from structlint.source.classifier import DEFAULT_EXTENSIONS

if TYPE_CHECKING:
    from collections.abc import Iterable

logger = logging.getLogger(__name__)

# Directories pruned at any depth.
_RECURSIVE_SKIP = frozenset({"node_modules", ".git"})

# Build output directories, pruned only directly under the root.
_ROOT_SKIP = frozenset({"dist", "build", "coverage"})

# Test suites are never validated.
_TEST_SUFFIXES = (".spec", ".test")

DEFAULT_IGNORE_FILE = ".gitignore"


@dataclass(frozen=True)
class IgnorePattern:
    """One line of an ignore file."""

    pattern: str
    negated: bool = False
    anchored: bool = False
    dir_only: bool = False

    def matches(self, rel_path: str, *, is_dir: bool = False) -> bool:
        """Return True if *rel_path* (POSIX, root-relative) or one of its parents matches."""
        parts = PurePosixPath(rel_path).parts
        if not parts:
            return False

        if self.anchored:
            # Candidate prefixes: a, a/b, a/b/c ...
            candidates = ["/".join(parts[: i + 1]) for i in range(len(parts))]
        else:
            candidates = list(parts)
        dir_flags = [True] * (len(parts) - 1) + [is_dir]

        regex = _compile_pattern(self.pattern)
        for candidate, candidate_is_dir in zip(candidates, dir_flags):
            if self.dir_only and not candidate_is_dir:
                continue
            if regex.fullmatch(candidate):
                return True
        return False


@functools.lru_cache(maxsize=256)
def _compile_pattern(pattern: str) -> re.Pattern[str]:
    """Translate a gitignore glob into a regex.

    ``*`` and ``?`` never cross ``/``; ``**/`` matches zero or more
    directories and a bare ``**`` matches anything.
    """
    out: list[str] = []
    i, n = 0, len(pattern)
    while i < n:
        ch = pattern[i]
        if pattern.startswith("**/", i):
            out.append("(?:.*/)?")
            i += 3
        elif pattern.startswith("**", i):
            out.append(".*")
            i += 2
        elif ch == "*":
            out.append("[^/]*")
            i += 1
        elif ch == "?":
            out.append("[^/]")
            i += 1
        elif ch == "[":
            end = pattern.find("]", i + 2)
            if end == -1:
                out.append(re.escape(ch))
                i += 1
                continue
            body = pattern[i + 1 : end]
            if body.startswith("!"):
                body = "^" + body[1:]
            out.append("[" + body + "]")
            i = end + 1
        elif ch == "\\" and i + 1 < n:
            out.append(re.escape(pattern[i + 1]))
            i += 2
        else:
            out.append(re.escape(ch))
            i += 1
    return re.compile("".join(out))


def parse_ignore_lines(lines: Iterable[str]) -> list[IgnorePattern]:
    """Parse ignore-file lines; blank lines and ``#`` comments are skipped."""
    patterns: list[IgnorePattern] = []
    for raw in lines:
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        negated = line.startswith("!")
        if negated:
            line = line[1:]
        dir_only = line.endswith("/")
        line = line.rstrip("/")
        anchored = "/" in line
        line = line.lstrip("/")
        if line.endswith("/**"):
            line = line[: -len("/**")]
        if not line:
            continue
        patterns.append(
            IgnorePattern(pattern=line, negated=negated, anchored=anchored, dir_only=dir_only)
        )
    return patterns


def read_ignore_file(root: Path, name: str = DEFAULT_IGNORE_FILE) -> list[IgnorePattern]:
    """Load ignore patterns from ``root/name``; a missing file yields no patterns."""
    path = root / name
    try:
        content = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return []
    except (OSError, UnicodeDecodeError):
        logger.debug("Cannot read ignore file: %s", path)
        return []
    return parse_ignore_lines(content.splitlines())


class IgnoreMatcher:
    """Applies an ordered list of patterns; the last matching pattern wins."""

    def __init__(self, patterns: Iterable[IgnorePattern]) -> None:
        self.patterns = list(patterns)

    def ignores(self, rel_path: str, *, is_dir: bool = False) -> bool:
        ignored = False
        for pattern in self.patterns:
            if pattern.matches(rel_path, is_dir=is_dir):
                ignored = not pattern.negated
        return ignored


def _is_test_file(name: str, extensions: tuple[str, ...]) -> bool:
    stem, ext = os.path.splitext(name)
    return ext in extensions and stem.endswith(_TEST_SUFFIXES)


def discover_files(
    root: Path,
    *,
    extensions: Iterable[str] = DEFAULT_EXTENSIONS,
    ignore_file: str | None = DEFAULT_IGNORE_FILE,
    extra_ignores: Iterable[str] = (),
) -> list[str]:
    """Return root-relative POSIX paths of source files under *root*, sorted.

    Skips dependency and build directories, ``*.spec``/``*.test`` files,
    and anything matched by the ignore file or *extra_ignores*.
    """
    exts = tuple(extensions)
    patterns = read_ignore_file(root, ignore_file) if ignore_file else []
    patterns.extend(parse_ignore_lines(extra_ignores))
    matcher = IgnoreMatcher(patterns)

    found: list[str] = []
    for dirpath, dirnames, filenames in os.walk(root):
        rel_dir = Path(dirpath).relative_to(root).as_posix()
        at_root = rel_dir == "."
        kept: list[str] = []
        for dirname in sorted(dirnames):
            if dirname in _RECURSIVE_SKIP or (at_root and dirname in _ROOT_SKIP):
                continue
            rel = dirname if at_root else f"{rel_dir}/{dirname}"
            if matcher.ignores(rel, is_dir=True):
                continue
            kept.append(dirname)
        dirnames[:] = kept

        for filename in filenames:
            if not filename.endswith(exts) or _is_test_file(filename, exts):
                continue
            rel = filename if at_root else f"{rel_dir}/{filename}"
            if matcher.ignores(rel):
                continue
            found.append(rel)

    found.sort()
    logger.debug("Discovered %d source files under %s", len(found), root)
    return found
