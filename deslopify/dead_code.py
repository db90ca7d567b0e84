"""Conservative detection of functions that nothing else appears to use."""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

from .models import ANONYMOUS, FunctionInfo, ImportInfo, ScanResult

# Method name prefixes that usually mark framework hooks, interface
# implementations or lifecycle methods invoked by a framework, not user code.
FRAMEWORK_PREFIXES = (
    "get",
    "set",
    "is",
    "has",
    "on",
    "handle",
    "configure",
    "build",
    "create",
    "update",
    "delete",
    "remove",
    "find",
    "to",
    "from",
    "supports",
    "execute",
    "invoke",
    "process",
    "render",
    "validate",
    "resolve",
    "load",
    "register",
    "subscribe",
    "provide",
    "apply",
    "normalize",
    "denormalize",
    "transform",
    "reverse",
    "before",
    "after",
    "pre",
    "post",
    "can",
    "should",
    "will",
    "do",
    "make",
    "parse",
    "format",
    "serialize",
    "deserialize",
    "map",
    "reduce",
    "filter",
    "convert",
    "run",
    "start",
    "stop",
    "up",
    "down",
    "boot",
)

MIN_FUNCTION_LINES = 15
MIN_NAME_LENGTH = 8
MIN_STEM_LENGTH = 4

_IMPORT_SPLIT = re.compile(r"[/.:\\, ]")


@dataclass
class DeadCodeStats:
    unreferenced_function_count: int = 0
    unreferenced_lines: int = 0


def detect_dead_code(
    functions: Iterable[FunctionInfo],
    imports: Iterable[ImportInfo],
    scan: ScanResult,
) -> DeadCodeStats:
    """Count substantial, specifically named functions in isolated files that no
    other file mentions."""
    functions = list(functions)
    imports = list(imports)
    if not functions:
        return DeadCodeStats()

    connected = find_connected_files(imports, scan)
    import_names = {
        part
        for imp in imports
        for part in _IMPORT_SPLIT.split(imp.module_path)
        if part
    }

    stats = DeadCodeStats()
    seen_names: set[str] = set()

    for func in functions:
        if should_skip(func):
            continue
        if func.name in seen_names:
            continue
        seen_names.add(func.name)
        if func.file in connected:
            continue
        if func.name in import_names:
            continue
        referenced_elsewhere = any(
            Path(f.path) != func.file and func.name in f.content for f in scan.files
        )
        if not referenced_elsewhere:
            stats.unreferenced_function_count += 1
            stats.unreferenced_lines += func.line_count

    return stats


def find_connected_files(imports: Iterable[ImportInfo], scan: ScanResult) -> set[Path]:
    """Files whose stem is named by an import from another file, or appears as
    a whole word in another file's content."""
    file_stems: dict[Path, str] = {}
    for file in scan.files:
        path = Path(file.path)
        if path.name:
            file_stems[path] = path.stem

    connected: set[Path] = set()

    for imp in imports:
        for path, stem in file_stems.items():
            if imp.file != path and stem in imp.module_path:
                connected.add(path)

    for path, stem in file_stems.items():
        if len(stem.encode("utf-8")) < MIN_STEM_LENGTH:
            continue
        if any(
            Path(f.path) != path and contains_as_word(f.content, stem)
            for f in scan.files
        ):
            connected.add(path)

    return connected


def _is_ident_char(ch: str) -> bool:
    return ch == "_" or (ch.isascii() and ch.isalnum())


def contains_as_word(haystack: str, needle: str) -> bool:
    """True when needle occurs in haystack not flanked by identifier characters."""
    if len(needle) > len(haystack):
        return False
    start = 0
    while True:
        pos = haystack.find(needle, start)
        if pos < 0:
            return False
        before_ok = pos == 0 or not _is_ident_char(haystack[pos - 1])
        after = pos + len(needle)
        after_ok = after >= len(haystack) or not _is_ident_char(haystack[after])
        if before_ok and after_ok:
            return True
        start = pos + 1


def should_skip(func: FunctionInfo) -> bool:
    """True for functions too small, too generic or too hook-like to judge."""
    name = func.name
    if name == ANONYMOUS:
        return True
    if name.startswith(("test_", "Test", "test")):
        return True
    if func.line_count < MIN_FUNCTION_LINES:
        return True
    if len(name.encode("utf-8")) < MIN_NAME_LENGTH:
        return True
    if name.startswith("__"):
        return True
    return name.lower().startswith(FRAMEWORK_PREFIXES)