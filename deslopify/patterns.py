"""Line-level anti-pattern detection and counting of global mutable state."""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

from .models import FileEntry, PatternMatch


@dataclass(frozen=True)
class AntiPattern:
    """A named regular expression that flags a questionable line of code."""

    name: str
    description: str
    regex: re.Pattern[str]
    context_sensitive: bool = False

    def matches(self, line: str) -> bool:
        return self.regex.search(line) is not None


PATTERNS: tuple[AntiPattern, ...] = (
    AntiPattern(
        "todo_placeholder",
        "TODO/FIXME/HACK/XXX placeholder left in code",
        re.compile(r"(?i)\b(TODO|FIXME|HACK|XXX)\b"),
    ),
    AntiPattern(
        "debug_print",
        "Debug print statement left in code",
        re.compile(
            r"^\s*(print\(|console\.log\(|fmt\.Print|System\.out\.print|puts\s|p\s|dbg!\(|println!\()"
        ),
        context_sensitive=True,
    ),
    AntiPattern(
        "commented_code",
        "Commented-out code block",
        re.compile(
            r"^\s*(//|#)\s*(if|for|while|def|fn |func |class |import|from|return|var |let |const )"
        ),
    ),
    AntiPattern(
        "bare_except",
        "Bare except/catch catches everything",
        re.compile(r"^\s*(except\s*:|catch\s*\{|catch\s*\(.*Exception\s*\))"),
    ),
    AntiPattern(
        "star_import",
        "Star/wildcard import reduces clarity",
        re.compile(r"from\s+\S+\s+import\s+\*|import\s+\*"),
    ),
    AntiPattern(
        "magic_number",
        "Magic number in logic (not 0, 1, 2)",
        re.compile(r"[=<>!]+\s*\d{3,}|if.*\b\d{3,}\b"),
    ),
    AntiPattern(
        "deeply_nested_callback",
        "Callback nesting exceeds readable depth",
        re.compile(r"^\s{16,}(if|for|while|\.then|\.catch|async|await)"),
    ),
    AntiPattern(
        "empty_catch",
        "Empty exception handler swallows errors",
        re.compile(r"(except.*:\s*$|catch\s*\(.*\)\s*\{\s*\})"),
    ),
)

OUTPUT_STEMS = frozenset(
    {
        "main",
        "cli",
        "cmd",
        "output",
        "display",
        "print",
        "printer",
        "console",
        "log",
        "logger",
        "logging",
        "format",
        "formatter",
        "render",
        "ui",
        "view",
        "app",
    }
)

OUTPUT_PARENT_DIRS = frozenset(
    {"output", "display", "cli", "ui", "views", "view", "console", "render", "print", "logging"}
)

TEST_PARENT_DIRS = frozenset({"test", "tests", "spec", "specs", "__tests__"})

_TEST_STEM_SUFFIXES = ("_test", "_spec", ".test", ".spec")

_GLOBAL_MUTABLE_RES = (
    re.compile(r"^[A-Z_]{2,}\s*=\s*\["),
    re.compile(r"^[A-Z_]{2,}\s*=\s*\{"),
    re.compile(r"^static\s+mut\s"),
)
_JS_VAR_RE = re.compile(r"^var\s+\w+\s*=")


def _lines(content: str) -> list[str]:
    if not content:
        return []
    parts = content.split("\n")
    if content.endswith("\n"):
        parts.pop()
    return [p[:-1] if p.endswith("\r") else p for p in parts]


def _parent_dir_name(path: Path) -> str:
    return path.parent.name.lower()


def is_likely_test_context(path: str | Path) -> bool:
    """Judge by file name and immediate parent directory only, so a project that
    itself lives under a "tests" directory is not treated as all tests."""
    path = Path(path)
    stem = path.stem.lower()
    if stem.startswith("test_") or stem.endswith(_TEST_STEM_SUFFIXES) or stem == "conftest":
        return True
    return _parent_dir_name(path) in TEST_PARENT_DIRS


def should_skip_context_sensitive(path: str | Path) -> bool:
    """True for test files and for files whose job is producing output."""
    path = Path(path)
    if is_likely_test_context(path):
        return True
    if path.stem.lower() in OUTPUT_STEMS:
        return True
    return _parent_dir_name(path) in OUTPUT_PARENT_DIRS


def detect_patterns(files: Iterable[FileEntry]) -> list[PatternMatch]:
    """Report every anti-pattern hit, line by line, in every file."""
    matches: list[PatternMatch] = []
    for file in files:
        skip_context = should_skip_context_sensitive(file.path)
        active = [p for p in PATTERNS if not (p.context_sensitive and skip_context)]
        for line_num, line in enumerate(_lines(file.content), start=1):
            matches.extend(
                PatternMatch(
                    file=file.path,
                    line=line_num,
                    pattern_name=pattern.name,
                    description=pattern.description,
                )
                for pattern in active
                if pattern.matches(line)
            )
    return matches


def _is_global_mutable(line: str) -> bool:
    if not line or line.startswith(("//", "#", " ", "\t")):
        return False
    if _JS_VAR_RE.match(line):
        return True
    return any(pattern.match(line) for pattern in _GLOBAL_MUTABLE_RES)


def count_global_mutables(files: Iterable[FileEntry]) -> int:
    """Count top-level mutable globals outside test files."""
    return sum(
        1
        for file in files
        if not is_likely_test_context(file.path)
        for line in _lines(file.content)
        if _is_global_mutable(line)
    )