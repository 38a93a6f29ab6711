import os
import subprocess
import sys
import pytest

TEST_DIR = os.path.dirname(__file__)
SCRIPT = os.path.join(TEST_DIR, "..", "..", "json_parser.py")

@pytest.mark.parametrize("filename", ["valid.json", "valid2.json"])
def test_nested_valid(filename):
    """Accepts nested objects and arrays"""
    result = subprocess.run([sys.executable, SCRIPT, os.path.join(TEST_DIR, filename)],
                            capture_output=True, text=True)
    assert result.returncode == 0
    assert result.stdout.startswith("Object([")

@pytest.mark.parametrize("filename", ["invalid.json"])
def test_nested_invalid(filename):
    """Rejects a mismatched closer inside a nested value"""
    result = subprocess.run([sys.executable, SCRIPT, os.path.join(TEST_DIR, filename)],
                            capture_output=True, text=True)
    assert result.returncode == 1
    assert result.stderr.startswith("ParseError:")
