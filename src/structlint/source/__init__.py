"""Source domain — discovery, file classification, module grouping, declaration extraction."""

from structlint.source.classifier import (
    APP_MODULE,
    FileRole,
    SourceFile,
    classify,
    extract_module_name,
    group_by_module,
)
from structlint.source.declarations import (
    Argument,
    CallSite,
    Declaration,
    Decorator,
    ParsedFile,
    extract_declarations,
    extract_from_source,
)
from structlint.source.discovery import IgnoreMatcher, discover_files, parse_ignore_lines
from structlint.source.ts_parser import (
    clear_cache,
    get_decorator_name,
    get_decorators,
    get_lang_config,
    get_line,
    supported_extensions,
    visit,
)

__all__ = [
    "APP_MODULE",
    "Argument",
    "CallSite",
    "Declaration",
    "Decorator",
    "FileRole",
    "IgnoreMatcher",
    "ParsedFile",
    "SourceFile",
    "classify",
    "clear_cache",
    "discover_files",
    "extract_declarations",
    "extract_from_source",
    "extract_module_name",
    "get_decorator_name",
    "get_decorators",
    "get_lang_config",
    "get_line",
    "group_by_module",
    "parse_ignore_lines",
    "supported_extensions",
    "visit",
]
