import logging
import sys
import structlog


def setup_logging(log_level="WARNING", json_logs=False):
    """
    Configures structlog on top of stdlib logging, writing to stderr.

    Reports are written to stdout, so log records must never share it.
    """
    timestamper = structlog.processors.TimeStamper(fmt="iso")
    shared_processors = [
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        timestamper,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        structlog.processors.format_exc_info,
    ]

    if json_logs:
        processors = shared_processors + [
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors = shared_processors + [
            structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    log_level_value = getattr(logging, log_level.upper(), logging.WARNING)
    logging.basicConfig(level=log_level_value, stream=sys.stderr, format="%(message)s")
    logging.getLogger().setLevel(log_level_value)


def get_logger(name):
    return structlog.get_logger(name)
