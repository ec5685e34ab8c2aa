import textwrap
from pathlib import Path

import pytest

from lintkit.models.diagnostic import AnalysisResult, Diagnostic, Severity

EXAMPLES_DIR = Path(__file__).resolve().parent.parent / "examples"


@pytest.fixture
def write_plugin(tmp_path: Path):
    """Writes an analyzer module into tmp_path and returns its path."""
    def _write(code: str, name: str = "plugin.py") -> Path:
        plugin_file = tmp_path / name
        plugin_file.write_text(textwrap.dedent(code))
        return plugin_file
    return _write


@pytest.fixture
def examples_dir() -> Path:
    return EXAMPLES_DIR


@pytest.fixture
def make_diagnostic():
    def _make(code, severity=Severity.WARNING, message="Test warning", origin="Test Analyzer", **kwargs):
        return Diagnostic(rule_code=code, severity=severity, message=message, origin=origin, **kwargs)
    return _make


@pytest.fixture
def make_result():
    def _make(diagnostics=(), errors=()):
        return AnalysisResult(diagnostics=list(diagnostics), errors=list(errors))
    return _make
