class LintKitError(Exception):
    """Base class for errors raised by LintKit."""
    pass


class PluginLoadError(LintKitError):
    """Raised when an analyzer module cannot be found or imported."""

    def __init__(self, path: str, message: str):
        super().__init__(message)
        self.path = path


class UnknownFormatError(LintKitError, ValueError):
    """Raised for an output format name that has no renderer."""
    pass


class ConfigError(LintKitError, ValueError):
    """Raised when a configuration file cannot be parsed."""
    pass


# What the host recovers from when analyzer code fails. KeyboardInterrupt still propagates.
ANALYZER_ERRORS = (Exception, SystemExit)
