"""Core data records shared by the analysis passes."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

ANONYMOUS = "<anonymous>"


@dataclass
class FileEntry:
    """A scanned file with its text and basic size figures."""

    path: Path
    content: str
    line_count: int
    size_bytes: int
    language: str = ""

    def __post_init__(self) -> None:
        self.path = Path(self.path)


@dataclass
class ScanResult:
    """Everything gathered from walking the codebase."""

    files: list[FileEntry] = field(default_factory=list)
    language_breakdown: list[Any] = field(default_factory=list)
    configs: list[Any] = field(default_factory=list)
    git_activity: Any = None
    total_files: int = 0
    total_lines: int = 0
    total_bytes: int = 0
    test_file_count: int = 0
    source_file_count: int = 0
    max_file_lines: int = 0
    avg_file_lines: int = 0
    max_dir_depth: int = 0
    top_level_dirs: int = 0


@dataclass
class FunctionInfo:
    """A function or method found in a source file."""

    name: str
    file: Path
    start_line: int
    line_count: int
    cyclomatic_complexity: int
    max_nesting: int

    def __post_init__(self) -> None:
        self.file = Path(self.file)


@dataclass
class ImportInfo:
    """One import statement and the module path it names."""

    file: Path
    module_path: str
    line: int

    def __post_init__(self) -> None:
        self.file = Path(self.file)


@dataclass
class DuplicateCluster:
    """A group of structurally identical chunks found in several files."""

    hash: int
    locations: list[tuple[Path, int]]
    line_count: int
    similarity: float


@dataclass
class NamingStats:
    """Counts of function names by casing style."""

    snake_case_count: int = 0
    camel_case_count: int = 0
    pascal_case_count: int = 0
    screaming_snake_count: int = 0
    mixed_count: int = 0

    def total(self) -> int:
        return (
            self.snake_case_count
            + self.camel_case_count
            + self.pascal_case_count
            + self.screaming_snake_count
            + self.mixed_count
        )

    def dominant_style_ratio(self) -> float:
        """Share of names that follow the most common consistent style."""
        total = self.total()
        if total == 0:
            return 1.0
        dominant = max(
            self.snake_case_count,
            self.camel_case_count,
            self.pascal_case_count,
            self.screaming_snake_count,
        )
        return dominant / total


@dataclass
class PatternMatch:
    """An anti-pattern hit on a given line of a file."""

    file: Path
    line: int
    pattern_name: str
    description: str

    def __post_init__(self) -> None:
        self.file = Path(self.file)


def is_likely_minified(file: FileEntry) -> bool:
    """Guess whether a file is minified: very long lines or a short, large file."""
    if file.line_count == 0:
        return False
    avg_line_len = file.size_bytes / file.line_count
    return (file.line_count <= 3 and file.size_bytes > 1024) or avg_line_len > 200.0