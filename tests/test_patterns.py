from pathlib import Path

import pytest

from deslopify.models import FileEntry
from deslopify.patterns import (
    count_global_mutables,
    detect_patterns,
    is_likely_test_context,
    should_skip_context_sensitive,
)


def make_file_at(path, content):
    return FileEntry(
        path=Path(path),
        content=content,
        line_count=len(content.splitlines()),
        size_bytes=len(content.encode("utf-8")),
    )


def make_file(content):
    return make_file_at("src/engine.py", content)


def names(matches):
    return {m.pattern_name for m in matches}


def test_detects_todo():
    assert "todo_placeholder" in names(detect_patterns([make_file("# TODO: fix this\nx = 1\n")]))


def test_detects_fixme():
    assert "todo_placeholder" in names(detect_patterns([make_file("// FIXME: broken\n")]))


def test_detects_debug_print_python():
    assert "debug_print" in names(detect_patterns([make_file("print('debug')\nx = 1\n")]))


def test_detects_console_log():
    file = make_file_at("src/utils.js", "  console.log('test')\n")
    assert "debug_print" in names(detect_patterns([file]))


def test_detects_bare_except():
    file = make_file("try:\n    pass\nexcept:\n    pass\n")
    assert "bare_except" in names(detect_patterns([file]))


def test_detects_star_import():
    assert "star_import" in names(detect_patterns([make_file("from os import *\n")]))


def test_detects_commented_code():
    file = make_file("# if x > 0:\n#     return True\n")
    assert "commented_code" in names(detect_patterns([file]))


def test_clean_code_no_patterns():
    assert detect_patterns([make_file("def add(a, b):\n    return a + b\n")]) == []


def test_match_records_line_and_description():
    matches = detect_patterns([make_file("x = 1\n# TODO later\n")])
    todo = [m for m in matches if m.pattern_name == "todo_placeholder"]
    assert len(todo) == 1
    assert todo[0].line == 2
    assert todo[0].file == Path("src/engine.py")
    assert todo[0].description == "TODO/FIXME/HACK/XXX placeholder left in code"


def test_test_context_suppresses_only_debug_print():
    content = "print('x')\nfrom os import *\n"
    in_library = names(detect_patterns([make_file_at("src/engine.py", content)]))
    in_tests = names(detect_patterns([make_file_at("tests/test_engine.py", content)]))
    assert in_library == {"debug_print", "star_import"}
    assert in_tests == {"star_import"}


@pytest.mark.parametrize(
    "path, content",
    [
        ("tests/test_utils.py", "print('debug output')\n"),
        ("src/tests/helpers.py", "print('test helper')\n"),
        ("src/main.py", "print('Hello, world!')\n"),
        ("src/cli.rs", 'println!("Usage: tool [options]");\n'),
        ("src/output.rs", 'println!("{}", result);\n'),
        ("src/output/terminal.rs", 'println!("result: {}", score);\n'),
        ("app/views/home.py", "print(render_template())\n"),
    ],
)
def test_skips_debug_print_in_context(path, content):
    assert "debug_print" not in names(detect_patterns([make_file_at(path, content)]))


def test_still_detects_debug_print_in_library_code():
    file = make_file_at("src/parser.py", "print('debug')\n")
    assert "debug_print" in names(detect_patterns([file]))


def test_still_detects_todo_in_test_files():
    file = make_file_at("tests/test_utils.py", "# TODO: fix flaky test\nprint('ok')\n")
    found = names(detect_patterns([file]))
    assert "todo_placeholder" in found
    assert "debug_print" not in found


@pytest.mark.parametrize(
    "path, expected",
    [
        ("src/test_engine.py", True),
        ("src/engine_test.go", True),
        ("src/widget.spec.ts", True),
        ("conftest.py", True),
        ("pkg/specs/thing.rb", True),
        ("tests/fixtures/app/engine.py", False),
        ("src/engine.py", False),
    ],
)
def test_is_likely_test_context(path, expected):
    assert is_likely_test_context(path) is expected


@pytest.mark.parametrize(
    "path, expected",
    [
        ("src/logger.py", True),
        ("src/display/panel.py", True),
        ("src/parser.py", False),
    ],
)
def test_should_skip_context_sensitive(path, expected):
    assert should_skip_context_sensitive(path) is expected


def test_global_mutable_detection():
    file = make_file("GLOBAL_LIST = [\n    1, 2, 3\n]\nGLOBAL_MAP = {\n}\n")
    assert count_global_mutables([file]) == 2


def test_global_mutable_ignores_indented():
    assert count_global_mutables([make_file("    var x = 1\n    let y = 2\n")]) == 0


def test_global_mutable_var_toplevel():
    assert count_global_mutables([make_file("var globalState = {}\n")]) == 1


def test_global_mutable_static_mut():
    assert count_global_mutables([make_file("static mut COUNTER: u32 = 0;\n")]) == 1


def test_no_global_mutables_in_clean_code():
    assert count_global_mutables([make_file("fn main() {\n    let x = 1;\n}\n")]) == 0


def test_lazy_static_not_flagged_as_global_mutable():
    file = make_file_at(
        "src/lib.rs",
        'lazy_static! {\n    static ref RE: Regex = Regex::new(r"\\d+").unwrap();\n}\n',
    )
    assert count_global_mutables([file]) == 0


def test_once_cell_not_flagged_as_global_mutable():
    file = make_file_at(
        "src/lib.rs",
        'once_cell::sync::Lazy::new(|| Regex::new(r"\\d+").unwrap());\n',
    )
    assert count_global_mutables([file]) == 0


def test_global_mutables_skipped_in_test_files():
    file = make_file_at("src/test_engine.py", "GLOBAL_STATE = []\nCACHE = {}\n")
    assert count_global_mutables([file]) == 0


def test_global_mutables_skipped_in_test_directories():
    file = make_file_at("tests/conftest.py", "FIXTURES = []\n")
    assert count_global_mutables([file]) == 0


def test_global_mutables_summed_across_files():
    files = [make_file_at("src/a.py", "A_LIST = []\n"), make_file_at("src/b.py", "B_MAP = {}\n")]
    assert count_global_mutables(files) == 2