"""Detection of structurally duplicated code chunks across files."""

from __future__ import annotations

import re
from collections import defaultdict
from collections.abc import Iterable, Sequence
from pathlib import Path

from .models import DuplicateCluster, FileEntry

MIN_CHUNK_LINES = 8
MIN_RAW_LEN = 60
MIN_NORMALIZED_LEN = 30
MIN_KEYWORD_COUNT = 2

_HASH_MASK = (1 << 64) - 1

_STRING_RE = re.compile(r"(\"[^\"]*\"|'[^']*')")
_IDENT_RE = re.compile(r"[a-zA-Z_][a-zA-Z0-9_]*")

KEYWORDS = frozenset(
    {
        "if", "else", "for", "while", "return", "fn", "def", "class", "struct",
        "enum", "match", "let", "const", "var", "import", "from", "use", "pub",
        "self", "Self", "true", "false", "None", "null", "nil", "async", "await",
        "try", "catch", "except", "finally", "raise", "throw", "new", "in", "not",
        "and", "or", "is", "as", "with", "yield", "break", "continue", "pass",
        "lambda", "function", "export", "default", "static", "mut", "impl",
        "trait", "type", "interface", "extends", "super", "package", "void",
        "int", "float", "double", "bool", "string", "char",
    }
)


def _lines(content: str) -> list[str]:
    if not content:
        return []
    parts = content.split("\n")
    if content.endswith("\n"):
        parts.pop()
    return [p[:-1] if p.endswith("\r") else p for p in parts]


def _stride(line_count: int) -> int:
    if line_count > 2000:
        return 4
    if line_count > 500:
        return 2
    return 1


def _meaningful(line: str) -> bool:
    return bool(line) and not line.startswith("//") and not line.startswith("#")


def find_duplicates(files: Iterable[FileEntry]) -> list[DuplicateCluster]:
    """Find fixed-size chunks that normalise identically in at least two files."""
    by_hash: dict[int, list[tuple[Path, int, str]]] = defaultdict(list)

    for file in files:
        lines = _lines(file.content)
        if len(lines) < MIN_CHUNK_LINES:
            continue
        stride = _stride(len(lines))
        for start in range(0, len(lines) - MIN_CHUNK_LINES + 1, stride):
            window = (line.strip() for line in lines[start : start + MIN_CHUNK_LINES])
            raw_chunk = "\n".join(line for line in window if _meaningful(line))
            # Recorded position is the window start advanced by one stride.
            recorded = start + stride

            if len(raw_chunk.encode("utf-8")) < MIN_RAW_LEN:
                continue
            normalized = normalize_chunk(raw_chunk)
            if len(normalized.encode("utf-8")) < MIN_NORMALIZED_LEN:
                continue
            if count_keywords(normalized) < MIN_KEYWORD_COUNT:
                continue
            by_hash[simple_hash(normalized)].append(
                (Path(file.path), recorded, raw_chunk)
            )

    clusters = []
    for digest, entries in by_hash.items():
        if len(entries) < 2 or len({path for path, _, _ in entries}) < 2:
            continue
        clusters.append(
            DuplicateCluster(
                hash=digest,
                locations=[(path, line) for path, line, _ in entries],
                line_count=MIN_CHUNK_LINES,
                similarity=compute_similarity([chunk for _, _, chunk in entries]),
            )
        )
    return clusters


def normalize_chunk(chunk: str) -> str:
    """Replace string literals and non-keyword identifiers with placeholders and
    collapse whitespace."""
    without_strings = _STRING_RE.sub('"_"', chunk)
    without_idents = _IDENT_RE.sub(
        lambda m: m.group(0) if is_keyword(m.group(0)) else "_ID_", without_strings
    )
    return " ".join(without_idents.split())


def count_keywords(normalized: str) -> int:
    return sum(1 for word in normalized.split() if is_keyword(word))


def is_keyword(word: str) -> bool:
    return word in KEYWORDS


def compute_similarity(chunks: Sequence[str]) -> float:
    """Lowest Jaccard token similarity between the first chunk and each other one."""
    if len(chunks) < 2:
        return 1.0
    first_tokens = set(chunks[0].split())
    lowest = 1.0
    for other in chunks[1:]:
        other_tokens = set(other.split())
        union = first_tokens | other_tokens
        if union:
            lowest = min(lowest, len(first_tokens & other_tokens) / len(union))
    return lowest


def simple_hash(text: str) -> int:
    """djb2 hash over UTF-8 bytes, wrapping at 64 bits."""
    digest = 5381
    for byte in text.encode("utf-8"):
        digest = (digest * 33 + byte) & _HASH_MASK
    return digest