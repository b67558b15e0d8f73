"""Structlog configuration for forumprofile."""

import logging
import sys

import structlog

from forumprofile.config import LogFormat, ProfileConfig
from forumprofile.exceptions import ConfigError

_SHARED_PROCESSORS = (
    structlog.contextvars.merge_contextvars,
    structlog.processors.add_log_level,
    structlog.processors.TimeStamper(fmt="iso"),
)


def resolve_level(name: str) -> int:
    """
    Map a level name such as ``"debug"`` or ``"WARNING"`` to its numeric value.

    Raises:
        ConfigError: If the name is not a standard logging level
    """
    level = logging.getLevelName(name.strip().upper())
    if not isinstance(level, int):
        raise ConfigError(f"unknown log level {name!r}")
    return level


def _renderers(log_format: LogFormat) -> list:
    if log_format == LogFormat.JSON:
        return [
            structlog.processors.dict_tracebacks,
            structlog.processors.JSONRenderer(sort_keys=True),
        ]
    return [
        structlog.dev.set_exc_info,
        structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()),
    ]


def configure_logging(config: ProfileConfig | None = None) -> None:
    """
    Route structlog events to stderr at the configured level.

    JSON output is one sorted object per line with structured tracebacks;
    console output is colored when stderr is a terminal.

    Raises:
        ConfigError: If ``config.log_level`` is not a logging level name
    """
    config = config or ProfileConfig()
    level = resolve_level(config.log_level)

    logging.basicConfig(format="%(message)s", stream=sys.stderr, level=level)
    structlog.configure(
        processors=[*_SHARED_PROCESSORS, *_renderers(config.log_format)],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str | None = None) -> structlog.BoundLogger:
    """Logger tagged with the component that emits through it."""
    if name is None:
        return structlog.get_logger()
    return structlog.get_logger(component=name)
