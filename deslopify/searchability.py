"""Measures of how easy it is to find things by name with a text search."""

from __future__ import annotations

from collections import Counter, defaultdict
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from pathlib import Path

from .models import ANONYMOUS, FunctionInfo, ScanResult

# Idiomatic names that naturally repeat across many files.
STRUCTURAL_NAMES = frozenset(
    {
        "__construct",
        "constructor",
        "__init__",
        "__str__",
        "__repr__",
        "__eq__",
        "__hash__",
        "__len__",
        "__iter__",
        "__next__",
        "__enter__",
        "__exit__",
        "__getattr__",
        "__setattr__",
        "__delattr__",
        "__get__",
        "__set__",
        "__delete__",
        "init",
        "setUp",
        "tearDown",
        "setUpClass",
        "tearDownClass",
        "beforeEach",
        "afterEach",
        "beforeAll",
        "afterAll",
        "toString",
        "toJSON",
        "valueOf",
        "clone",
        "equals",
        "hashCode",
        "compareTo",
        "execute",
        "run",
        "handle",
        "invoke",
        "apply",
        "fmt",
        "from",
        "into",
        "default",
        "new",
        "drop",
    }
)

GENERIC_NAMES = frozenset(
    {
        "utils",
        "helpers",
        "common",
        "misc",
        "data",
        "handler",
        "process",
        "base",
        "core",
        "manager",
        "service",
        "index",
        "main",
        "lib",
        "mod",
        "init",
        "config",
        "constants",
        "types",
    }
)


@dataclass
class SearchabilityStats:
    duplicate_filenames: int
    worst_duplicate_filename: tuple[str, int] | None
    function_name_collisions: int
    worst_collision: tuple[str, int] | None
    generic_name_count: int


def analyze(scan: ScanResult, functions: Iterable[FunctionInfo]) -> SearchabilityStats:
    functions = list(functions)
    duplicates, worst_duplicate = count_duplicate_filenames(scan)
    collisions, worst_collision = count_function_collisions(functions)
    return SearchabilityStats(
        duplicate_filenames=duplicates,
        worst_duplicate_filename=worst_duplicate,
        function_name_collisions=collisions,
        worst_collision=worst_collision,
        generic_name_count=count_generic_names(scan, functions),
    )


def _count_and_worst(
    counts: Mapping[str, int], threshold: int
) -> tuple[int, tuple[str, int] | None]:
    total = 0
    worst: tuple[str, int] | None = None
    for name, count in counts.items():
        if count < threshold:
            continue
        total += 1
        if worst is None or count > worst[1]:
            worst = (name, count)
    return total, worst


def count_duplicate_filenames(scan: ScanResult) -> tuple[int, tuple[str, int] | None]:
    """Count base names shared by more than one file, and the most repeated one."""
    name_counts = Counter(Path(file.path).name for file in scan.files)
    return _count_and_worst(name_counts, 2)


def count_function_collisions(
    functions: Iterable[FunctionInfo],
) -> tuple[int, tuple[str, int] | None]:
    """Count function names defined in three or more distinct files."""
    name_to_files: dict[str, set[Path]] = defaultdict(set)
    for func in functions:
        if func.name == ANONYMOUS or func.name in STRUCTURAL_NAMES:
            continue
        name_to_files[func.name].add(func.file)
    file_counts = {name: len(files) for name, files in name_to_files.items()}
    return _count_and_worst(file_counts, 3)


def count_generic_names(scan: ScanResult, functions: Iterable[FunctionInfo]) -> int:
    """Count file stems and function names that are a bare generic word."""
    file_hits = sum(
        1 for file in scan.files if is_generic_name(Path(file.path).stem.lower())
    )
    func_hits = sum(1 for func in functions if is_generic_name(func.name.lower()))
    return file_hits + func_hits


def is_generic_name(name: str) -> bool:
    """True only when the whole name is one of the generic words."""
    return name in GENERIC_NAMES