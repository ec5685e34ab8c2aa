from abc import ABC, abstractmethod
from typing import Callable, Iterable, Optional

from pydantic import BaseModel

from lintkit.models.diagnostic import Diagnostic, Fix, Location, Severity

__all__ = [
    "AnalysisContext",
    "Analyzer",
    "cli_analyzer",
    "Diagnostic",
    "Fix",
    "Location",
    "Severity",
]

# Attribute set on functions marked with @cli_analyzer; holds the analyzer name.
CLI_ANALYZER_ATTR = "__lintkit_analyzer__"


class AnalysisContext(BaseModel):
    """
    What an analyzer sees for one compilation unit.

    project is the nearest project descriptor above the unit, if any.
    """
    path: str
    source: str
    project: Optional[str] = None

    class Config:
        frozen = True


def cli_analyzer(func: Optional[Callable] = None, *, name: Optional[str] = None):
    """
    Marks a module-level function as an analysis entry point.

    The function receives an AnalysisContext and returns an iterable of
    Diagnostic, or a coroutine producing one. Usable bare or with a name:

        @cli_analyzer
        def no_todos(ctx): ...

        @cli_analyzer(name="no-todos")
        def no_todos(ctx): ...
    """
    def mark(f: Callable) -> Callable:
        setattr(f, CLI_ANALYZER_ATTR, name or f.__name__)
        return f

    if func is None:
        return mark
    return mark(func)


class Analyzer(ABC):
    """
    Base interface for class-based analyzers.

    Concrete subclasses defined in a plugin module are instantiated with no
    arguments when the module is loaded.
    """
    id: str = ""

    @abstractmethod
    def analyze(self, context: AnalysisContext) -> Iterable[Diagnostic]:
        """
        Analyzes one compilation unit and returns the findings.
        """
        pass
