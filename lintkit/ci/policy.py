from __future__ import annotations
from lintkit.models.diagnostic import AnalysisResult

EXIT_OK = 0
EXIT_VIOLATIONS = 1
EXIT_FATAL = 2


def exit_code(result: AnalysisResult) -> int:
    """1 when any diagnostic was reported, 0 otherwise. Run errors do not count."""
    return EXIT_VIOLATIONS if result.diagnostics else EXIT_OK


def evaluate_exit_code(result: AnalysisResult, requested_plugins: int, loaded_plugins: int) -> int:
    """
    Exit code for a whole CLI run.

    Having asked for analyzers and loaded none of them is a fatal host
    error, distinct from the violation code.
    """
    if requested_plugins > 0 and loaded_plugins == 0:
        return EXIT_FATAL
    return exit_code(result)
