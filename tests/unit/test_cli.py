import os
import subprocess
import sys

REPO_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", ".."))
SCRIPT = os.path.join(REPO_ROOT, "json_parser.py")


def _run(*args, stdin=None, env=None):
    return subprocess.run(
        [sys.executable, SCRIPT, *args],
        input=stdin, capture_output=True, text=True, cwd=REPO_ROOT, env=env,
    )


def test_cli_prints_debug_tree(tmp_path):
    path = tmp_path / "doc.json"
    path.write_text('{"a": 1, "b": [true, null]}', encoding="utf-8")
    cp = _run(str(path))
    assert cp.returncode == 0
    assert cp.stdout.strip() == 'Object([("a", Number(1.0)), ("b", Array([Boolean(true), Null]))])'


def test_cli_quiet_prints_ok(tmp_path):
    path = tmp_path / "doc.json"
    path.write_text("[1,2,3]", encoding="utf-8")
    cp = _run(str(path), "--quiet")
    assert cp.returncode == 0
    assert cp.stdout.strip() == "OK"


def test_cli_reads_stdin():
    cp = _run("-", stdin=' "hi" ')
    assert cp.returncode == 0
    assert cp.stdout.strip() == 'String("hi")'


def test_cli_parse_error_exit_1():
    cp = _run("-", stdin='{"a":1,}')
    assert cp.returncode == 1
    assert "ParseError: expected string key in object" in cp.stderr


def test_cli_missing_file_exit_2(tmp_path):
    cp = _run(str(tmp_path / "nope.json"))
    assert cp.returncode == 2
    assert cp.stderr.startswith("error:")


def test_cli_max_depth(tmp_path):
    cp = _run("-", "--max-depth", "2", stdin="[[[]]]")
    assert cp.returncode == 1
    assert "depth limit exceeded" in cp.stderr
    cp = _run("-", "--max-depth", "0", "--quiet", stdin="[" * 300 + "]" * 300)
    assert cp.returncode == 0


def test_cli_debug_logging_from_env():
    env = dict(os.environ, JSON_PARSER_LOG_LEVEL="DEBUG")
    cp = _run("-", stdin="nul", env=env)
    assert cp.returncode == 1
    assert "parse failed: EXPECTED_NULL" in cp.stderr
