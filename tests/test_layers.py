import pytest

from deslopify.layers import (
    analyze_layers,
    build_group_edges,
    build_group_map,
    compute_layering_score,
    extract_group,
    find_bidirectional_deps,
    find_god_modules,
)
from deslopify.models import FileEntry, ImportInfo, ScanResult


def make_scan(paths):
    files = [FileEntry(path=p, content="", line_count=1, size_bytes=1) for p in paths]
    return ScanResult(files=files, total_files=len(files))


def test_no_imports_clean_layering():
    result = analyze_layers([], ScanResult())
    assert result.layering_score == 1.0
    assert result.bidirectional_pairs == []
    assert result.group_count == 0


def test_bidirectional_detected():
    edges = {"src/api": {"src/db"}, "src/db": {"src/api"}}
    assert find_bidirectional_deps(edges) == [("src/api", "src/db")]


def test_unidirectional_no_violations():
    edges = {"src/api": {"src/db", "src/models"}}
    assert find_bidirectional_deps(edges) == []
    assert compute_layering_score(edges) == 1.0


def test_god_module_detected():
    edges = {
        name: {"src/core"} for name in ("src/api", "src/web", "src/cli", "src/workers")
    }
    assert "src/core" in find_god_modules(edges, 5)


def test_god_modules_need_three_groups():
    edges = {"a": {"b"}}
    assert find_god_modules(edges, 2) == []


def test_god_module_below_threshold():
    edges = {"a": {"core"}, "b": {"core"}}
    assert find_god_modules(edges, 5) == []


def test_layering_score_mixed():
    edges = {"a": {"b", "c"}, "b": {"a"}}
    assert compute_layering_score(edges) == pytest.approx(0.5)


def test_extract_group_nested():
    assert extract_group("src/api/routes.py") == "src/api"


def test_extract_group_shallow():
    assert extract_group("src/main.rs") == "src"


def test_extract_group_bare_file():
    assert extract_group("main.rs") is None


def test_build_group_map_skips_top_level_files():
    scan = make_scan(["main.py", "src/api/routes.py"])
    assert build_group_map(scan) == {"src/api/routes.py": "src/api"}


def test_build_group_edges_resolves_components():
    groups = {"src/api/routes.py": "src/api", "lib/db/models.py": "lib/db"}
    imports = [
        ImportInfo(file="src/api/routes.py", module_path="db.models", line=1),
        ImportInfo(file="src/api/routes.py", module_path="api.helpers", line=2),
        ImportInfo(file="unknown.py", module_path="db", line=1),
    ]
    assert build_group_edges(imports, groups) == {"src/api": {"lib/db"}}


def test_analyze_layers_bidirectional():
    scan = make_scan(["src/api/routes.py", "src/db/models.py"])
    imports = [
        ImportInfo(file="src/api/routes.py", module_path="src/db", line=1),
        ImportInfo(file="src/db/models.py", module_path="src/api", line=1),
    ]
    result = analyze_layers(imports, scan)
    assert result.group_count == 2
    assert result.bidirectional_pairs == [("src/api", "src/db")]
    assert result.god_modules == []
    assert result.layering_score == 0.0


def test_analyze_layers_clean_direction():
    scan = make_scan(["src/api/routes.py", "src/db/models.py", "src/web/views.py"])
    imports = [
        ImportInfo(file="src/api/routes.py", module_path="src/db", line=1),
        ImportInfo(file="src/web/views.py", module_path="src/db", line=1),
    ]
    result = analyze_layers(imports, scan)
    assert result.group_count == 3
    assert result.bidirectional_pairs == []
    assert result.god_modules == ["src/db"]
    assert result.layering_score == 1.0