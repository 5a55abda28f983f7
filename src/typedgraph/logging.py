"""Centralized logging configuration for typedgraph.

The library itself only creates module loggers. Applications embedding the
store may call configure_logging() once at startup.

Logging Levels:
- DEBUG: Structural mutations (node/edge add, delete, cascade)
- WARNING: Rolled-back mutual connections
"""

import logging
import os

LOG_LEVEL_ENV_VAR = "TYPEDGRAPH_LOG_LEVEL"
_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


class ComponentFormatter(logging.Formatter):
    """Formatter that extracts component name from logger path.

    Converts full module paths to short component names:
    - typedgraph.index -> index
    - typedgraph.connection -> connection
    """

    def format(self, record: logging.LogRecord) -> str:
        parts = record.name.split(".")
        if len(parts) >= 2 and parts[0] == "typedgraph":
            record.component = parts[1]
        else:
            record.component = parts[0]
        return super().format(record)


def resolve_level(level: str | None = None) -> str:
    """Resolve a log level name, falling back to the env var, then INFO."""
    if level is None:
        level = os.environ.get(LOG_LEVEL_ENV_VAR, "INFO")
    level = level.upper()
    if level not in _LEVELS:
        level = "INFO"
    return level


def configure_logging(level: str | None = None, use_rich: bool = False) -> None:
    """Configure logging for typedgraph.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR).
            If None, uses TYPEDGRAPH_LOG_LEVEL env var or INFO.
        use_rich: Use Rich handler for colorful output.
    """
    log_level = getattr(logging, resolve_level(level))

    handler: logging.Handler
    if use_rich:
        from rich.logging import RichHandler

        handler = RichHandler(
            rich_tracebacks=False,
            show_path=False,
            show_time=True,
            markup=False,
        )
        handler.setFormatter(ComponentFormatter("%(component)s | %(message)s"))
    else:
        handler = logging.StreamHandler()
        handler.setFormatter(
            ComponentFormatter(
                "%(asctime)s | %(levelname)-8s | %(component)s | %(message)s",
                datefmt="%H:%M:%S",
            )
        )

    package_logger = logging.getLogger("typedgraph")
    package_logger.handlers = [handler]
    package_logger.setLevel(log_level)
    package_logger.propagate = False
