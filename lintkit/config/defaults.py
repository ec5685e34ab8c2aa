from lintkit.config.targets import TargetsConfig
from lintkit.config.engine import EngineConfig
from lintkit.config.output import OutputConfig

DEFAULT_CONFIG = {
    "analyzers": [],
    "targets": TargetsConfig.default().model_dump(),
    "engine": EngineConfig.default().model_dump(),
    "output": OutputConfig.default().model_dump(),
}
