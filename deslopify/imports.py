"""Import graph statistics: fan-in, fan-out and circular dependencies."""

from __future__ import annotations

from collections import Counter, defaultdict
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from pathlib import Path

from .models import ImportInfo


@dataclass
class ImportGraphStats:
    avg_fan_out: float = 0.0
    max_fan_out: int = 0
    max_fan_out_file: Path | None = None
    avg_fan_in: float = 0.0
    max_fan_in: int = 0
    max_fan_in_module: str | None = None
    circular_dep_count: int = 0
    largest_cycle_size: int = 0
    cycle_modules: list[list[str]] = field(default_factory=list)


def compute_import_graph(imports: Iterable[ImportInfo]) -> ImportGraphStats:
    """Summarise how many imports each file makes, how often each module is
    imported, and which files and modules form import cycles."""
    fan_out: Counter[Path] = Counter()
    fan_in: Counter[str] = Counter()
    edges: dict[str, set[str]] = defaultdict(set)

    for imp in imports:
        fan_out[imp.file] += 1
        fan_in[imp.module_path] += 1
        edges[str(imp.file)].add(imp.module_path)

    stats = ImportGraphStats()

    if fan_out:
        stats.avg_fan_out = sum(fan_out.values()) / len(fan_out)
        stats.max_fan_out_file, stats.max_fan_out = max(
            fan_out.items(), key=lambda item: item[1]
        )
    if fan_in:
        stats.avg_fan_in = sum(fan_in.values()) / len(fan_in)
        stats.max_fan_in_module, stats.max_fan_in = max(
            fan_in.items(), key=lambda item: item[1]
        )

    stats.cycle_modules = [scc for scc in find_sccs(edges) if len(scc) > 1]
    stats.circular_dep_count = len(stats.cycle_modules)
    stats.largest_cycle_size = max((len(c) for c in stats.cycle_modules), default=0)
    return stats


def find_sccs(edges: Mapping[str, Iterable[str]]) -> list[list[str]]:
    """Strongly connected components of a directed graph (Tarjan's algorithm)."""
    adjacency = {node: sorted(targets) for node, targets in edges.items()}
    nodes: set[str] = set(adjacency)
    for targets in adjacency.values():
        nodes.update(targets)

    index: dict[str, int] = {}
    lowlink: dict[str, int] = {}
    stack: list[str] = []
    on_stack: set[str] = set()
    sccs: list[list[str]] = []
    counter = 0

    def visit(node: str) -> tuple[str, Iterator[str]]:
        nonlocal counter
        index[node] = lowlink[node] = counter
        counter += 1
        stack.append(node)
        on_stack.add(node)
        return node, iter(adjacency.get(node, ()))

    for root in sorted(nodes):
        if root in index:
            continue
        work = [visit(root)]
        while work:
            v, neighbours = work[-1]
            descended = False
            for w in neighbours:
                if w not in index:
                    work.append(visit(w))
                    descended = True
                    break
                if w in on_stack:
                    lowlink[v] = min(lowlink[v], index[w])
            if descended:
                continue

            work.pop()
            if work:
                parent = work[-1][0]
                lowlink[parent] = min(lowlink[parent], lowlink[v])

            if lowlink[v] == index[v]:
                component: list[str] = []
                while True:
                    w = stack.pop()
                    on_stack.discard(w)
                    component.append(w)
                    if w == v:
                        break
                sccs.append(component)

    return sccs