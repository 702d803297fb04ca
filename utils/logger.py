"""
Logging utilities with API key masking.

Module loggers come from setup_logger(); their level follows the global
LoggingContext, which scheduled generation runs switch to BATCH so only
the entrypoints and the pipeline keep reporting progress.
"""

import logging
import re
import os
from typing import Optional
from enum import Enum
from config.settings import settings


class LoggingContext(Enum):
    """Logging context modes for different execution scenarios."""
    STANDALONE = "standalone"  # Interactive use (full logging)
    BATCH = "batch"            # Scheduled generation (only entrypoints at INFO)
    SILENT = "silent"          # Tests / embedding (critical only)


def _mode_from_env() -> LoggingContext:
    try:
        return LoggingContext(os.getenv('LOG_MODE', 'standalone').lower())
    except ValueError:
        return LoggingContext.STANDALONE


_CURRENT_MODE = _mode_from_env()

# Loggers that keep their requested level in batch mode
CONSOLE_LOGGERS = {
    'run_signal_generation', 'run_risk_calculator', 'scan_pipeline',
}

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
LOG_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def set_logging_mode(mode: LoggingContext):
    """
    Set the global logging mode.

    Only loggers created after the call pick up the new level, so CLIs
    switch modes before importing the pipeline modules.
    """
    global _CURRENT_MODE
    _CURRENT_MODE = mode


def get_logging_mode() -> LoggingContext:
    return _CURRENT_MODE


def resolve_level(name: str, level: int) -> int:
    """Level a logger named `name` gets under the current mode."""
    if _CURRENT_MODE == LoggingContext.SILENT:
        return logging.CRITICAL
    if _CURRENT_MODE == LoggingContext.BATCH and name not in CONSOLE_LOGGERS:
        return max(level, logging.WARNING)
    return level


class SecureFormatter(logging.Formatter):
    """
    Formatter that masks credentials in log messages.

    Masks `apiKey=` query values (Polygon URLs end up in retry warnings)
    and any long alphanumeric run that looks like a key.
    """

    query_key_pattern = re.compile(r'(apiKey=)([^&\s]+)', re.IGNORECASE)
    token_pattern = re.compile(r'\b[A-Za-z0-9]{20,}\b')

    def format(self, record):
        message = super().format(record)
        message = self.query_key_pattern.sub(
            lambda m: m.group(1) + settings.mask_api_key(m.group(2)), message
        )
        return self.token_pattern.sub(lambda m: settings.mask_api_key(m.group(0)), message)


def _build_handler(handler: logging.Handler, level: int) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(SecureFormatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
    return handler


def setup_logger(
    name: str,
    level: int = logging.INFO,
    log_file: Optional[str] = None
) -> logging.Logger:
    """
    Setup a logger with secure formatting and context-aware levels.

    Args:
        name: Logger name, usually the module's short name
        level: Requested level; BATCH and SILENT modes may raise it
        log_file: Optional file path for file logging

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)
    effective_level = resolve_level(name, level)
    logger.setLevel(effective_level)

    # Re-running setup replaces handlers instead of stacking them
    logger.handlers.clear()
    logger.addHandler(_build_handler(logging.StreamHandler(), effective_level))
    if log_file:
        logger.addHandler(_build_handler(logging.FileHandler(log_file, encoding='utf-8'), effective_level))

    return logger
