import copy
import yaml
from pathlib import Path
from typing import Dict, Any, Optional
import collections.abc

from lintkit.core.errors import ConfigError
from lintkit.utils.logging import get_logger
from .defaults import DEFAULT_CONFIG

logger = get_logger(__name__)

SECTIONS = ("targets", "engine", "output")


def deep_merge(base: Dict, override: Dict) -> Dict:
    """
    Recursively merges two dictionaries.
    'override' values take precedence over 'base' values.
    Lists are overridden, not merged.
    """
    result = base.copy()
    for key, value in override.items():
        if (
            isinstance(value, collections.abc.Mapping)
            and key in result
            and isinstance(result[key], collections.abc.Mapping)
        ):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def _read_config_file(path: Path) -> Dict[str, Any]:
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)
    if data is None:
        return {}
    if not isinstance(data, collections.abc.Mapping):
        raise yaml.YAMLError(f"top-level value must be a mapping, got {type(data).__name__}")
    return dict(data)


def load_config(project_path: str = ".", config_path: Optional[str] = None) -> Dict[str, Any]:
    """
    Loads and merges configurations from default, global, and project-specific files.

    An explicit config_path replaces the project's .lintkit.yaml.
    """
    # 1. Start with the default config
    config = copy.deepcopy(DEFAULT_CONFIG)

    # 2. Load and merge global config
    global_config_path = Path.home() / ".lintkit" / "config.yaml"
    if global_config_path.is_file():
        try:
            config = deep_merge(config, _read_config_file(global_config_path))
        except yaml.YAMLError as e:
            logger.warning("global_config_invalid", path=str(global_config_path), error=str(e))

    # 3. Load and merge project-specific config
    project_config_path = Path(config_path) if config_path else Path(project_path) / ".lintkit.yaml"
    if project_config_path.is_file():
        try:
            config = deep_merge(config, _read_config_file(project_config_path))
        except yaml.YAMLError as e:
            raise ConfigError(
                f"Error parsing project config file at {project_config_path}: {e}"
            ) from e

    # 4. Validate final config
    for section in SECTIONS:
        if not isinstance(config.get(section), collections.abc.Mapping):
            raise ConfigError(f"Configuration section '{section}' must be a mapping.")
    if not isinstance(config.get("analyzers") or [], list):
        raise ConfigError("Configuration key 'analyzers' must be a list of paths.")

    return config
