from __future__ import annotations
from typing import Any, List

from lintkit.models.diagnostic import AnalysisResult, Severity

SUCCESS_MESSAGE = "Analysis completed successfully - no violations found"

SEVERITY_WORDS = {
    Severity.ERROR: "error",
    Severity.WARNING: "warning",
    Severity.INFO: "info",
    Severity.HINT: "hint",
}


def severity_word(severity: Any) -> str:
    return SEVERITY_WORDS.get(Severity.coerce(severity), "unknown")


def _one_line(text: str) -> str:
    # Embedded line breaks become spaces so each entry stays on one line.
    return " ".join(text.splitlines())


def render_text(result: AnalysisResult, verbose: bool = False) -> str:
    lines: List[str] = [f"Error: {_one_line(error)}" for error in result.errors]

    if not result.diagnostics:
        if verbose:
            lines.append(SUCCESS_MESSAGE)
        return "\n".join(lines)

    if verbose:
        lines.append(f"Found {len(result.diagnostics)} violation(s):")

    for diagnostic in result.diagnostics:
        lines.append(f"[{_one_line(diagnostic.rule_code)}] {severity_word(diagnostic.severity)}: {_one_line(diagnostic.message)}")
        if verbose:
            lines.append(f"  Type: {_one_line(diagnostic.origin)}")
            lines.append(f"  File: {_one_line(diagnostic.file or 'unknown')}")

    return "\n".join(lines)
