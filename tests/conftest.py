"""
Pytest configuration for the calcguard test suite.

This conftest.py provides:
- Machine-mode logging (suppresses console output)
- Isolation from the user's global config and environment
- Stylesheet fixtures for detector/fixer/CLI tests
"""

import os

import pytest

from calcguard.cli.config import CLIConfig
from calcguard.logging_config import setup_logging
from calcguard.paths import CalcGuardPaths, reset_paths


def pytest_configure(config):
    """Configure pytest for quiet operation."""
    os.environ.setdefault("CALCGUARD_MACHINE_MODE", "1")


@pytest.fixture(autouse=True)
def setup_test_logging():
    """Machine mode by default - suppress console logs for clean test output."""
    setup_logging(level="DEBUG", suppress_console=True, enable_file_logging=False, force=True)


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Keep the real ~/.calcguard and CALCGUARD_* variables out of tests."""
    monkeypatch.setattr(CalcGuardPaths, "GLOBAL_DIR", tmp_path / "global_home")
    monkeypatch.delenv("CALCGUARD_FUNCTION_NAMES", raising=False)
    monkeypatch.delenv("CALCGUARD_HUMAN_MODE", raising=False)
    reset_paths()
    CLIConfig.set_machine_mode(None)
    yield
    reset_paths()
    CLIConfig.set_machine_mode(None)


@pytest.fixture
def stylesheet_dir(tmp_path):
    """
    Create a directory of stylesheets.

    Returns:
        Path to a directory with one clean file, one file with two issues,
        a nested file with one issue and a non-stylesheet file.
    """
    root = tmp_path / "styles"
    root.mkdir()
    (root / "clean.css").write_text("a { width: calc(100% - 10px); }\n")
    (root / "broken.css").write_text("a { width: calc(1px+1px); }\n")
    nested = root / "nested"
    nested.mkdir()
    (nested / "deep.scss").write_text(".b {\n  margin: calc(10px -2);\n}\n")
    (root / "notes.txt").write_text("calc(1px+1px)\n")
    return root
