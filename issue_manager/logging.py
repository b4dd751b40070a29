"""Root logger setup for the CLI.

Loggers by level:
- WARNING: rejected commands, duplicate ids skipped on load
- INFO: issues added, changed or deleted, files loaded and saved
- DEBUG: each transition inside Issue.apply, low-level file reads and writes

Level and format come from config.yaml (logging.level, logging.format) or
LOGGING_LEVEL / LOGGING_FORMAT.
"""

import logging

from issue_manager.config import DEFAULT_LOG_FORMAT, LoggingConfig

LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
}


def _resolve_level(level: str) -> int:
    """Level name to logging constant; unknown names give INFO."""
    return LEVELS.get(level.upper().strip(), logging.INFO)


def configure_logging(config: LoggingConfig) -> int:
    """Reset the root logger to config's level and format. Returns the level used."""
    level = _resolve_level(config.level)
    logging.basicConfig(level=level, format=config.format or DEFAULT_LOG_FORMAT, force=True)
    return level
