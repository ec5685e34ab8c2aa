from __future__ import annotations
import json
from typing import Any, Dict, Iterable, List

from lintkit import __version__
from lintkit.models.diagnostic import AnalysisResult, Diagnostic, Severity

SARIF_SCHEMA = "https://raw.githubusercontent.com/oasis-tcs/sarif-spec/master/Schemata/sarif-schema-2.1.0.json"
SARIF_VERSION = "2.1.0"
TOOL_NAME = "LintKit"
TOOL_INFORMATION_URI = "https://github.com/lintkit/lintkit"

SARIF_LEVELS = {
    Severity.ERROR: "error",
    Severity.WARNING: "warning",
    Severity.INFO: "note",
    Severity.HINT: "note",
}


def sarif_level(severity: Any) -> str:
    return SARIF_LEVELS.get(Severity.coerce(severity), "warning")


def rule_catalog(diagnostics: Iterable[Diagnostic]) -> List[Diagnostic]:
    """One representative diagnostic per rule code, in first-occurrence order."""
    representatives: Dict[str, Diagnostic] = {}
    for diagnostic in diagnostics:
        representatives.setdefault(diagnostic.rule_code, diagnostic)
    return list(representatives.values())


def _rule(diagnostic: Diagnostic) -> Dict[str, Any]:
    return {
        "id": diagnostic.rule_code,
        "name": diagnostic.origin,
        "shortDescription": {"text": diagnostic.message},
        "fullDescription": {"text": diagnostic.message},
        "defaultConfiguration": {"level": "warning"},
    }


def _region(diagnostic: Diagnostic) -> Dict[str, int]:
    location = diagnostic.location
    if location is None:
        return {"startLine": 1, "startColumn": 1, "endLine": 1, "endColumn": 1}
    return {
        "startLine": max(1, location.start_line),
        "startColumn": max(1, location.start_column),
        "endLine": max(1, location.end_line),
        "endColumn": max(1, location.end_column),
    }


def _result(diagnostic: Diagnostic) -> Dict[str, Any]:
    return {
        "ruleId": diagnostic.rule_code,
        "level": sarif_level(diagnostic.severity),
        "message": {"text": diagnostic.message},
        "locations": [
            {
                "physicalLocation": {
                    "artifactLocation": {"uri": diagnostic.file or "unknown"},
                    "region": _region(diagnostic),
                }
            }
        ],
    }


def build_sarif(result: AnalysisResult) -> Dict[str, Any]:
    run: Dict[str, Any] = {
        "tool": {
            "driver": {
                "name": TOOL_NAME,
                "version": __version__,
                "informationUri": TOOL_INFORMATION_URI,
                "rules": [_rule(d) for d in rule_catalog(result.diagnostics)],
            }
        },
        "results": [_result(d) for d in result.diagnostics],
    }

    # Host-level failures have no slot in a result; SARIF reports them per invocation.
    if result.errors:
        run["invocations"] = [
            {
                "executionSuccessful": False,
                "toolExecutionNotifications": [
                    {"level": "error", "message": {"text": error}} for error in result.errors
                ],
            }
        ]

    return {
        "$schema": SARIF_SCHEMA,
        "version": SARIF_VERSION,
        "runs": [run],
    }


def render_sarif(result: AnalysisResult) -> str:
    return json.dumps(build_sarif(result), indent=2)
