from pathlib import Path
from typing import List, Any, Iterable, Optional
import yaml
from gitignore_parser import parse_gitignore


def read_yaml_file(path: Path) -> Any:
    """Reads a YAML file and returns its parsed content."""
    with open(path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f)


def read_source_file(path: Path) -> str:
    """Reads a source file as UTF-8, replacing undecodable bytes."""
    with open(path, "r", encoding="utf-8", errors="replace") as f:
        return f.read()


def has_suffix(path: Path, suffixes: Iterable[str]) -> bool:
    """Case-insensitive check of a file name against a list of suffixes."""
    name = path.name.lower()
    return any(name.endswith(suffix.lower()) for suffix in suffixes)


def scan_directory(
    path: str,
    exclude_patterns: Optional[List[str]] = None,
    respect_gitignore: bool = True,
) -> List[Path]:
    """
    Scans a directory recursively, filtering files based on .gitignore rules
    and exclude patterns. The result is sorted by path.
    """
    base_dir = Path(path)
    gitignore_path = base_dir / ".gitignore"

    matches = None
    if respect_gitignore and gitignore_path.is_file():
        matches = parse_gitignore(str(gitignore_path), base_dir=str(base_dir))

    filtered_files = []

    for file_path in base_dir.rglob("*"):
        if not file_path.is_file():
            continue

        if matches and matches(str(file_path)):
            continue

        if exclude_patterns:
            if any(file_path.match(pattern) for pattern in exclude_patterns):
                continue

        filtered_files.append(file_path)

    return sorted(filtered_files, key=str)
