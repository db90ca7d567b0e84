"""Classification of function names by casing style."""

from __future__ import annotations

import re
from collections.abc import Iterable

from .models import ANONYMOUS, FunctionInfo, NamingStats

_SNAKE = re.compile(r"[a-z][a-z0-9]*(_[a-z0-9]+)*")
_CAMEL = re.compile(r"[a-z][a-zA-Z0-9]*")
_PASCAL = re.compile(r"[A-Z][a-zA-Z0-9]*")
_SCREAMING = re.compile(r"[A-Z][A-Z0-9]*(_[A-Z0-9]+)*")


def analyze_naming(functions: Iterable[FunctionInfo]) -> NamingStats:
    """Count how many function names follow each casing convention."""
    stats = NamingStats()
    for func in functions:
        name = func.name
        if not name or name == ANONYMOUS:
            continue
        if _SNAKE.fullmatch(name):
            stats.snake_case_count += 1
        elif _SCREAMING.fullmatch(name):
            stats.screaming_snake_count += 1
        elif _PASCAL.fullmatch(name):
            stats.pascal_case_count += 1
        elif _CAMEL.fullmatch(name):
            stats.camel_case_count += 1
        else:
            stats.mixed_count += 1
    return stats