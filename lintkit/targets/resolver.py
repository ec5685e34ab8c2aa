"""
Turns a user-supplied target path into the compilation units to analyze.

A target is one of: a source file, a project descriptor (YAML with a
``sources`` list), a solution descriptor (YAML with a ``projects`` list),
or a directory. Listed paths are relative to the descriptor's directory.
"""

import os
from pathlib import Path
from typing import Iterable, List, Optional, Union

import yaml

from lintkit.config.targets import TargetsConfig
from lintkit.utils.file_utils import has_suffix, read_yaml_file, scan_directory
from lintkit.utils.logging import get_logger

logger = get_logger(__name__)

PathLike = Union[str, os.PathLike]


def normalize_path(path: PathLike) -> str:
    return os.path.normpath(os.path.abspath(os.fspath(path)))


def dedupe(paths: Iterable[str]) -> List[str]:
    """Drops repeated paths, keeping the first occurrence."""
    seen = set()
    unique = []
    for path in paths:
        if path not in seen:
            seen.add(path)
            unique.append(path)
    return unique


class TargetResolver:
    def __init__(self, config: Optional[TargetsConfig] = None):
        self.config = config or TargetsConfig.default()

    def is_source(self, path: Path) -> bool:
        return has_suffix(path, self.config.source_extensions)

    def is_project(self, path: Path) -> bool:
        return has_suffix(path, self.config.project_suffixes)

    def is_solution(self, path: Path) -> bool:
        return has_suffix(path, self.config.solution_suffixes)

    def resolve(self, target: PathLike) -> List[str]:
        """
        Returns the ordered, deduplicated compilation units for a target.

        Absence is not an error: a missing path, an empty directory or a
        file of an unrecognized kind all yield an empty list.
        """
        path = Path(target)
        if path.is_dir():
            return self._resolve_directory(path)
        if not path.is_file():
            logger.info("target_not_found", target=str(target))
            return []
        if self.is_solution(path):
            return self._resolve_solution(path)
        if self.is_project(path):
            return self._resolve_project(path)
        if self.is_source(path):
            return [normalize_path(path)]
        logger.info("target_not_analyzable", target=str(target))
        return []

    def find_project_files(self, target: PathLike) -> List[str]:
        """
        Returns the project descriptors a target refers to: the file itself
        for a project, the listed projects for a solution, or every project
        descriptor below a directory.
        """
        path = Path(target)
        if path.is_dir():
            projects = [
                normalize_path(p)
                for p in scan_directory(str(path), respect_gitignore=False)
                if self.is_project(p)
            ]
            return dedupe(projects)
        if not path.is_file():
            return []
        if self.is_solution(path):
            return self._solution_projects(path)
        if self.is_project(path):
            return [normalize_path(path)]
        return []

    def find_project_file(self, unit: PathLike) -> Optional[str]:
        """
        Returns the nearest project descriptor in the unit's directory or any
        parent directory, or None. The first descriptor by name wins within a
        directory.
        """
        start = Path(normalize_path(unit))
        directory = start if start.is_dir() else start.parent
        for candidate in [directory, *directory.parents]:
            try:
                projects = sorted(p for p in candidate.iterdir() if p.is_file() and self.is_project(p))
            except OSError:
                continue
            if projects:
                return str(projects[0])
        return None

    def _resolve_directory(self, path: Path) -> List[str]:
        files = scan_directory(
            str(path),
            exclude_patterns=self.config.exclude_patterns,
            respect_gitignore=self.config.respect_gitignore,
        )
        return dedupe(normalize_path(f) for f in files if self.is_source(f))

    def _resolve_project(self, path: Path) -> List[str]:
        units = []
        for entry in self._read_descriptor(path, "sources"):
            source = Path(entry)
            if not source.is_file():
                logger.warning("project_source_missing", project=str(path), source=entry)
                continue
            if not self.is_source(source):
                logger.warning("project_source_ignored", project=str(path), source=entry)
                continue
            units.append(entry)
        return dedupe(units)

    def _resolve_solution(self, path: Path) -> List[str]:
        units = []
        for project in self._solution_projects(path):
            units.extend(self._resolve_project(Path(project)))
        return dedupe(units)

    def _solution_projects(self, path: Path) -> List[str]:
        projects = []
        for entry in self._read_descriptor(path, "projects"):
            project = Path(entry)
            if not self.is_project(project):
                logger.warning("solution_entry_not_a_project", solution=str(path), entry=entry)
                continue
            if not project.is_file():
                logger.warning("solution_project_missing", solution=str(path), project=entry)
                continue
            projects.append(entry)
        return dedupe(projects)

    def _read_descriptor(self, path: Path, key: str) -> List[str]:
        """Reads the path list stored under key, resolved against the descriptor's directory."""
        try:
            data = read_yaml_file(path)
        except (OSError, yaml.YAMLError) as e:
            logger.warning("descriptor_unreadable", path=str(path), error=str(e))
            return []

        entries = data.get(key) if isinstance(data, dict) else None
        if not isinstance(entries, list):
            logger.warning("descriptor_missing_list", path=str(path), key=key)
            return []

        base_dir = path.parent
        return [normalize_path(base_dir / entry) for entry in entries if isinstance(entry, str)]
