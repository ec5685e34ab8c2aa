from __future__ import annotations
from enum import Enum

from lintkit.core.errors import UnknownFormatError
from lintkit.models.diagnostic import AnalysisResult
from lintkit.report.format_sarif import render_sarif
from lintkit.report.format_text import render_text


class OutputFormat(str, Enum):
    TEXT = "text"
    SARIF = "sarif"


SUPPORTED_FORMATS = [f.value for f in OutputFormat]


def parse_output_format(name: str) -> OutputFormat:
    """Case-insensitive lookup of an output format by name."""
    try:
        return OutputFormat(name.strip().lower())
    except (ValueError, AttributeError):
        raise UnknownFormatError(
            f"Unknown output format: {name}. Supported formats: {', '.join(SUPPORTED_FORMATS)}"
        ) from None


def render(output_format: OutputFormat, result: AnalysisResult, verbose: bool = False) -> str:
    if output_format == OutputFormat.SARIF:
        return render_sarif(result)
    return render_text(result, verbose)
