import asyncio
import inspect
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Tuple, Union

from lintkit.cli.plugin_loader import EntryPoint
from lintkit.core.errors import ANALYZER_ERRORS
from lintkit.core.interfaces import AnalysisContext
from lintkit.models.diagnostic import AnalysisResult, Diagnostic
from lintkit.targets.resolver import TargetResolver
from lintkit.utils.file_utils import read_source_file
from lintkit.utils.logging import get_logger

logger = get_logger(__name__)

# Outcome of one (entry point, unit) invocation: diagnostics, or an error message.
SlotOutcome = Tuple[List[Diagnostic], Optional[str]]


async def _await(awaitable):
    return await awaitable


def _describe(exc: BaseException) -> str:
    return f"{type(exc).__name__}: {exc}"


class ExecutionEngine:
    """
    Runs every entry point against every compilation unit.

    Output order is entry point first, then unit, whatever the number of
    worker threads. A failing invocation becomes a run error and never
    stops the others.
    """

    def __init__(self, jobs: int = 1, resolver: Optional[TargetResolver] = None) -> None:
        if jobs < 1:
            raise ValueError(f"jobs must be at least 1, got {jobs}")
        self.jobs = jobs
        self.resolver = resolver or TargetResolver()

    def run(
        self,
        units: Iterable[str],
        entry_points: Iterable[EntryPoint],
        errors: Sequence[str] = (),
    ) -> AnalysisResult:
        """
        Produces the AnalysisResult for one invocation.

        errors seeds the result's run errors (typically plugin load
        failures) so they are reported ahead of execution failures.
        """
        units = list(units)
        entry_points = list(entry_points)
        slots = [(entry, unit) for entry in entry_points for unit in units]

        contexts = {unit: self._build_context(unit) for unit in units} if entry_points else {}

        def invoke(slot):
            entry, unit = slot
            return self._invoke(entry, unit, contexts[unit])

        if self.jobs == 1 or len(slots) < 2:
            outcomes = [invoke(slot) for slot in slots]
        else:
            # map() yields in submission order, so completion order never leaks out.
            with ThreadPoolExecutor(max_workers=self.jobs) as pool:
                outcomes = list(pool.map(invoke, slots))

        diagnostics: List[Diagnostic] = []
        run_errors: List[str] = list(errors)
        for found, error in outcomes:
            if error is not None:
                run_errors.append(error)
            else:
                diagnostics.extend(found)

        logger.info(
            "analysis_finished",
            entry_points=len(entry_points),
            units=len(units),
            diagnostics=len(diagnostics),
            errors=len(run_errors),
        )
        return AnalysisResult(diagnostics=diagnostics, errors=run_errors)

    def _build_context(self, unit: str) -> Union[AnalysisContext, OSError]:
        try:
            source = read_source_file(Path(unit))
        except OSError as e:
            logger.warning("unit_unreadable", unit=unit, error=str(e))
            return e
        return AnalysisContext(path=unit, source=source, project=self.resolver.find_project_file(unit))

    def _invoke(self, entry: EntryPoint, unit: str, context) -> SlotOutcome:
        if isinstance(context, OSError):
            return [], self._failure(entry, unit, context)
        try:
            produced = entry(context)
            if inspect.isawaitable(produced):
                produced = asyncio.run(_await(produced))
            found = []
            for item in produced or []:
                if not isinstance(item, Diagnostic):
                    raise TypeError(f"expected Diagnostic, got {type(item).__name__}")
                if not item.origin:
                    item = item.model_copy(update={"origin": entry.name})
                found.append(item)
        except ANALYZER_ERRORS as e:
            return [], self._failure(entry, unit, e)
        return found, None

    def _failure(self, entry: EntryPoint, unit: str, exc: BaseException) -> str:
        logger.warning("analyzer_failed", analyzer=entry.name, unit=unit, error=_describe(exc))
        return f"Analyzer '{entry.name}' failed on {unit}: {_describe(exc)}"


def run_analysis(
    entry_points: Iterable[EntryPoint],
    target: str,
    resolver: Optional[TargetResolver] = None,
    jobs: int = 1,
    errors: Sequence[str] = (),
) -> AnalysisResult:
    """Resolves target and runs the entry points over its compilation units."""
    resolver = resolver or TargetResolver()
    units = resolver.resolve(target)
    if not units:
        logger.warning("no_compilation_units", target=str(target))
    return ExecutionEngine(jobs=jobs, resolver=resolver).run(units, entry_points, errors=errors)
