import importlib.util
import inspect
import itertools
import os
import sys
from pathlib import Path
from typing import Any, Callable, Iterable, List, Tuple

from pydantic import BaseModel, Field

from lintkit.core.errors import ANALYZER_ERRORS, PluginLoadError
from lintkit.core.interfaces import CLI_ANALYZER_ATTR, Analyzer
from lintkit.utils.logging import get_logger

logger = get_logger(__name__)

# Every load gets its own module name so repeated loads stay independent.
# Names stay registered in sys.modules until PluginLoader.release().
_load_sequence = itertools.count()


class EntryPoint(BaseModel):
    """One runnable analysis function extracted from a plugin module."""
    name: str
    func: Callable[..., Any]

    class Config:
        frozen = True
        arbitrary_types_allowed = True

    def __call__(self, context):
        return self.func(context)


class LoadedPlugin(BaseModel):
    path: str
    module: Any
    entry_points: List[EntryPoint] = Field(default_factory=list)
    warnings: List[str] = Field(default_factory=list)

    class Config:
        frozen = True
        arbitrary_types_allowed = True


class PluginLoader:
    def __init__(self) -> None:
        self._registered: List[str] = []

    def load(self, path) -> LoadedPlugin:
        """
        Imports the analyzer module at path and extracts its entry points.

        Raises PluginLoadError when the file is missing or cannot be imported.
        A module without entry points is still a valid load.
        """
        plugin_path = Path(path)
        if not os.path.isfile(path):
            raise PluginLoadError(str(path), f"Analyzer module not found: {path}")

        module = self._import_module(path, plugin_path)
        entry_points, warnings = self._collect_entry_points(module, plugin_path)

        logger.info("plugin_loaded", path=str(path), entry_points=[e.name for e in entry_points])
        return LoadedPlugin(
            path=str(path),
            module=module,
            entry_points=entry_points,
            warnings=warnings,
        )

    def load_all(self, paths: Iterable) -> Tuple[List[LoadedPlugin], List[str]]:
        """
        Loads every path, partitioning successes from failure messages.
        """
        loaded: List[LoadedPlugin] = []
        errors: List[str] = []
        for path in paths:
            try:
                loaded.append(self.load(path))
            except PluginLoadError as e:
                logger.warning("plugin_load_failed", path=str(path), error=str(e))
                errors.append(str(e))
        return loaded, errors

    def release(self) -> None:
        """Drops every module this loader registered in sys.modules."""
        for module_name in self._registered:
            sys.modules.pop(module_name, None)
        self._registered.clear()

    def _import_module(self, path, plugin_path: Path):
        module_name = f"lintkit_plugin_{next(_load_sequence)}_{plugin_path.stem}"
        try:
            spec = importlib.util.spec_from_file_location(module_name, plugin_path)
            if not spec or not spec.loader:
                raise ImportError("not an importable Python module")

            module = importlib.util.module_from_spec(spec)
            sys.modules[module_name] = module
            spec.loader.exec_module(module)
            self._registered.append(module_name)
        except ANALYZER_ERRORS as e:
            sys.modules.pop(module_name, None)
            raise PluginLoadError(
                str(path), f"Failed to load analyzer from {path}: {e}"
            ) from e
        return module

    def _collect_entry_points(self, module, plugin_path: Path) -> Tuple[List[EntryPoint], List[str]]:
        functions: List[EntryPoint] = []
        classes: List[EntryPoint] = []
        warnings: List[str] = []

        for _, obj in inspect.getmembers(module):
            # Skip anything imported into the module rather than defined in it.
            if getattr(obj, "__module__", None) != module.__name__:
                continue

            if inspect.isclass(obj):
                if not issubclass(obj, Analyzer) or inspect.isabstract(obj):
                    continue
                name = f"{plugin_path.stem}.{obj.id or obj.__name__}"
                try:
                    instance = obj()
                except ANALYZER_ERRORS as e:
                    message = f"Failed to create analyzer {name} from {plugin_path}: {e}"
                    logger.error("analyzer_init_failed", analyzer=name, error=str(e))
                    warnings.append(message)
                    continue
                classes.append(EntryPoint(name=name, func=instance.analyze))

            elif callable(obj) and getattr(obj, CLI_ANALYZER_ATTR, None):
                name = f"{plugin_path.stem}.{getattr(obj, CLI_ANALYZER_ATTR)}"
                functions.append(EntryPoint(name=name, func=obj))

        return functions + classes, warnings


def load_plugins(paths: Iterable) -> Tuple[List[LoadedPlugin], List[str]]:
    return PluginLoader().load_all(paths)


def collect_entry_points(plugins: Iterable[LoadedPlugin]) -> List[EntryPoint]:
    """Concatenates entry points across plugins, keeping load order."""
    return [entry for plugin in plugins for entry in plugin.entry_points]
