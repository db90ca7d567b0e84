# deslopify

Static analyses that estimate how much friction a codebase puts in front of
an automated coding agent. Everything works on plain Python data. Describe
your files as `FileEntry` objects and collect them in a `ScanResult`. Describe
the functions and imports you found as `FunctionInfo` and `ImportInfo`
records. Then pass them to the analyses.

## Install

```
pip install deslopify
```

The package has no runtime dependencies beyond the standard library.

## Building blocks

`deslopify.models` holds the shared records:

- `FileEntry`: a path, its text, line count, byte size and an optional
  language label.
- `ScanResult`: the files of a scanned tree, plus summary counts.
- `FunctionInfo`: a function's name, file, start line, line count,
  cyclomatic complexity and maximum nesting.
- `ImportInfo`: the importing file, the module path it names and the line.
- `DuplicateCluster`: a group of repeated chunks, with their locations and a
  similarity figure.
- `NamingStats`: counts by casing style, with `total()` and
  `dominant_style_ratio()`.
- `PatternMatch`: one anti-pattern hit in a file.
- `is_likely_minified(file)`: true for files whose average line is longer
  than 200 bytes, and for files of at most three lines that are over 1 KiB.

## Analyses

| Module | Entry points |
| --- | --- |
| `deslopify.naming` | `analyze_naming(functions)` counts snake_case, camelCase, PascalCase, SCREAMING_SNAKE and mixed names. It skips anonymous and empty names. |
| `deslopify.searchability` | `analyze(scan, functions)` returns a `SearchabilityStats` with base file names shared by several files, function names defined in three or more files (idiomatic names such as `__init__` or `run` are left out) and bare generic names such as `utils` or `helpers`. `count_duplicate_filenames`, `count_function_collisions`, `count_generic_names` and `is_generic_name` are also available. |
| `deslopify.dead_code` | `detect_dead_code(functions, imports, scan)` conservatively counts functions of 15 or more lines with specific names (not hook-like prefixes such as `get` or `handle`). A function counts only when no other file imports its file, mentions it or names the function. The result is a `DeadCodeStats`. |
| `deslopify.duplication` | `find_duplicates(files)` finds 8-line chunks that appear in two or more files after string literals and non-keyword identifiers are replaced. Renamed variables still match. |
| `deslopify.imports` | `compute_import_graph(imports)` reports average and maximum fan-out and fan-in, and finds import cycles through `find_sccs(edges)`. The result is an `ImportGraphStats`. |
| `deslopify.layers` | `analyze_layers(imports, scan)` groups files by their first two directories. It reports pairs of groups that import each other and "god modules" that 60% or more of the groups import. It also gives a layering score, the share of group pairs whose dependencies run in one direction only. |
| `deslopify.patterns` | `detect_patterns(files)` flags TODO/FIXME markers, debug prints, commented-out code, bare or empty exception handlers, star imports, magic numbers and deep nesting. Debug prints are not flagged in test files or in output-oriented files such as `main` or `cli`. `count_global_mutables(files)` counts top-level mutable globals outside test files. |

## Example

```python
from deslopify.models import FunctionInfo
from deslopify.naming import analyze_naming

functions = [
    FunctionInfo(name="get_user", file="a.py", start_line=1, line_count=10,
                 cyclomatic_complexity=1, max_nesting=0),
    FunctionInfo(name="processData", file="b.py", start_line=1, line_count=10,
                 cyclomatic_complexity=1, max_nesting=0),
]
stats = analyze_naming(functions)
print(stats.total(), stats.dominant_style_ratio())  # 2 0.5
```

## What it does not do

This package is a library of analyses only:

- It does not walk directories or read files. You build the `FileEntry` and
  `ScanResult` records yourself.
- It does not parse source code. It does not extract functions, imports or
  complexity figures. You supply the `FunctionInfo` and `ImportInfo` records.
- It does not combine the analyses into an overall score. It does not give
  recommendations or print reports.
- It has no command-line program.

## Running the tests

```
pip install -e ".[test]"
pytest
```