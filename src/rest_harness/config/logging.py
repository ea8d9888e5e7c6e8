"""
Centralized logging configuration.

bootstrap_logging() can be called from any entry point (pytest plugin, invoke
tasks) to configure logging consistently using Python's native INI format.
"""

import logging
import logging.config
import os
import sys
from pathlib import Path
from typing import Optional

VALID_LEVELS = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
DEFAULT_FORMAT = '%(levelname)s: %(name)s: %(message)s'


def _find_logging_config() -> Optional[Path]:
    """
    Find the logging configuration file.

    Looks for logging.ini in the current working directory, then config/.

    Returns:
        Path to logging configuration file, or None if not found.
    """
    for candidate in (Path('logging.ini'), Path('config/logging.ini')):
        if candidate.exists():
            return candidate
    return None


def _resolve_level() -> str:
    """Return LOG_LEVEL from the environment, defaulting to WARNING."""
    level = os.environ.get('LOG_LEVEL', 'WARNING').strip().upper()
    if level not in VALID_LEVELS:
        print(f"Warning: Invalid LOG_LEVEL '{level}', using WARNING", file=sys.stderr)
        return 'WARNING'
    return level


def bootstrap_logging(name: Optional[str] = None) -> None:
    """
    Bootstrap logging for the harness.

    1. Loads logging.ini with logging.config.fileConfig() when one exists
    2. Otherwise falls back to logging.basicConfig()
    3. Applies the LOG_LEVEL environment variable to the root logger and the
       rest_harness logger

    Args:
        name: Optional logger name to report the configuration source to
    """
    level = _resolve_level()
    config_path = _find_logging_config()

    if config_path is None:
        logging.basicConfig(level=level, format=DEFAULT_FORMAT, stream=sys.stderr)
    else:
        try:
            logging.config.fileConfig(str(config_path), disable_existing_loggers=False)
        except (OSError, KeyError, ValueError) as e:
            print(f"Warning: Failed to load logging config from {config_path}: {e}", file=sys.stderr)
            logging.basicConfig(level=level, format=DEFAULT_FORMAT, stream=sys.stderr)

    logging.getLogger().setLevel(level)
    logging.getLogger('rest_harness').setLevel(level)

    logger = logging.getLogger(name) if name else logging.getLogger()
    logger.debug(f"Logging configured at {level} from {config_path or 'basicConfig'}")
