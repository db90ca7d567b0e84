"""Directional layering between top-level directory groups."""

from __future__ import annotations

import math
import re
from collections import defaultdict
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from pathlib import Path, PurePath

from .models import ImportInfo, ScanResult

_MODULE_SPLIT = re.compile(r"[/.:\\]")

GOD_MODULE_SHARE = 0.6


@dataclass
class LayerAnalysis:
    group_count: int = 0
    bidirectional_pairs: list[tuple[str, str]] = field(default_factory=list)
    god_modules: list[str] = field(default_factory=list)
    layering_score: float = 1.0


def analyze_layers(imports: Iterable[ImportInfo], scan: ScanResult) -> LayerAnalysis:
    """Analyse the import graph for directional layering between directory groups."""
    groups = build_group_map(scan)
    if not groups:
        return LayerAnalysis()

    group_edges = build_group_edges(imports, groups)
    group_count = len(set(groups.values()))
    return LayerAnalysis(
        group_count=group_count,
        bidirectional_pairs=find_bidirectional_deps(group_edges),
        god_modules=find_god_modules(group_edges, group_count),
        layering_score=compute_layering_score(group_edges),
    )


def build_group_map(scan: ScanResult) -> dict[str, str]:
    """Map each file path to its directory group."""
    groups: dict[str, str] = {}
    for file in scan.files:
        group = extract_group(file.path)
        if group is not None:
            groups[str(file.path)] = group
    return groups


def extract_group(path: str | Path) -> str | None:
    """Group name for a path: its first two directories, or its single directory
    for a file directly under one. None for a bare file name."""
    components = PurePath(path).parts
    if len(components) < 2:
        return None
    parts = [c for c in components if c not in (".", "..")][:2]
    if len(parts) >= 2:
        if len(components) > 2:
            return f"{parts[0]}/{parts[1]}"
        return parts[0]
    return "/".join(parts)


class _GroupIndex:
    """Lookup from import paths to directory groups."""

    def __init__(self, groups: Mapping[str, str]) -> None:
        self.all_groups = set(groups.values())
        self.component_to_groups: dict[str, set[str]] = defaultdict(set)
        for group in self.all_groups:
            for component in group.split("/"):
                self.component_to_groups[component].add(group)

    def resolve(self, module_path: str) -> str | None:
        if module_path in self.all_groups:
            return module_path
        for component in _MODULE_SPLIT.split(module_path):
            if component and component in self.component_to_groups:
                return min(self.component_to_groups[component])
        return None


def build_group_edges(
    imports: Iterable[ImportInfo], groups: Mapping[str, str]
) -> dict[str, set[str]]:
    """Directed edges between distinct groups implied by the imports."""
    index = _GroupIndex(groups)
    edges: dict[str, set[str]] = defaultdict(set)
    for imp in imports:
        from_group = groups.get(str(imp.file))
        if from_group is None:
            continue
        to_group = index.resolve(imp.module_path)
        if to_group is not None and to_group != from_group:
            edges[from_group].add(to_group)
    return dict(edges)


def _ordered(a: str, b: str) -> tuple[str, str]:
    return (a, b) if a < b else (b, a)


def find_bidirectional_deps(edges: Mapping[str, Iterable[str]]) -> list[tuple[str, str]]:
    """Pairs of groups that import each other, each pair listed once."""
    pairs: list[tuple[str, str]] = []
    seen: set[tuple[str, str]] = set()
    for src, targets in edges.items():
        for dst in targets:
            if src in edges.get(dst, ()):
                pair = _ordered(src, dst)
                if pair not in seen:
                    seen.add(pair)
                    pairs.append(pair)
    return pairs


def find_god_modules(edges: Mapping[str, Iterable[str]], total_groups: int) -> list[str]:
    """Groups imported by at least 60% of all groups (needs three or more groups)."""
    if total_groups < 3:
        return []
    incoming: dict[str, int] = defaultdict(int)
    for targets in edges.values():
        for target in targets:
            incoming[target] += 1
    threshold = math.ceil(total_groups * GOD_MODULE_SHARE)
    return [module for module, count in incoming.items() if count >= threshold]


def compute_layering_score(edges: Mapping[str, Iterable[str]]) -> float:
    """Share of connected group pairs whose dependency runs in one direction only."""
    total = 0
    unidirectional = 0
    counted: set[tuple[str, str]] = set()
    for src, targets in edges.items():
        for dst in targets:
            pair = _ordered(src, dst)
            if pair in counted:
                continue
            counted.add(pair)
            total += 1
            if src not in edges.get(dst, ()):
                unidirectional += 1
    if total == 0:
        return 1.0
    return unidirectional / total