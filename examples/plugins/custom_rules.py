"""
Example analyzer plugin.

Run it with:

    lintkit --analyzers examples/plugins/custom_rules.py --target examples/sample.lksln
"""
from typing import List

from lintkit.core.interfaces import (
    AnalysisContext,
    Analyzer,
    Diagnostic,
    Location,
    Severity,
    cli_analyzer,
)


class NoPrintAnalyzer(Analyzer):
    id = "no-print"
    description = "Avoid using print() in production code."

    def analyze(self, context: AnalysisContext) -> List[Diagnostic]:
        diagnostics = []
        for i, line in enumerate(context.source.splitlines()):
            column = line.find("print(")
            if column >= 0 and not line.strip().startswith("#"):
                diagnostics.append(Diagnostic(
                    rule_code="CUSTOM001",
                    severity=Severity.WARNING,
                    message=self.description,
                    origin="No Print Analyzer",
                    location=Location(
                        file=context.path,
                        start_line=i + 1,
                        start_column=column + 1,
                        end_column=column + len("print(") + 1,
                    ),
                ))
        return diagnostics


@cli_analyzer(name="todo-comments")
def todo_comments(context: AnalysisContext) -> List[Diagnostic]:
    diagnostics = []
    for i, line in enumerate(context.source.splitlines()):
        column = line.find("# TODO")
        if column >= 0:
            diagnostics.append(Diagnostic(
                rule_code="CUSTOM002",
                severity=Severity.INFO,
                message=f"TODO found: '{line[column + 2:].strip()}'. Consider creating a proper task.",
                origin="TODO Analyzer",
                location=Location(file=context.path, start_line=i + 1, start_column=column + 1),
            ))
    return diagnostics
