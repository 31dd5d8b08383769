"""Logging utilities for consistent logger creation across the project.

Loggers are named after module paths ('tap_capture.capture_service',
'common.backend.evdev'); handlers are installed once on the top-level
'tap_capture' and 'common' loggers by the CLI.
"""

import logging
import sys
from datetime import datetime
from pathlib import Path

ROOT_LOGGERS = ('tap_capture', 'common')


def get_logger(name: str | None = None) -> logging.Logger:
    """Create or retrieve a logger with consistent naming.

    Args:
        name: Logger name. If None, the calling module's __name__ is used.

    Returns:
        logging.Logger: Logger instance

    Examples:
        >>> logger = get_logger('tap_capture.dbus')
        >>> logger.info('Message')
    """
    if name is None:
        import inspect
        frame = inspect.currentframe()
        if frame is not None and frame.f_back is not None:
            name = frame.f_back.f_globals.get('__name__', 'tap_capture')
        else:
            name = 'tap_capture'

    return logging.getLogger(name)


class ISOFormatter(logging.Formatter):
    """Log formatter with ISO timestamp including milliseconds.

    Formats log messages as:
        <ISO-datetime-with-ms> <log-level> [<module>:<lineno>]: <message>
    """

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.created).isoformat(timespec='milliseconds')
        message = f'{timestamp} {record.levelname} [{record.module}:{record.lineno}]: {record.getMessage()}'
        if record.exc_info:
            message += '\n' + self.formatException(record.exc_info)
        return message


def setup_logging_handler(
    log_level: str = 'INFO',
    log_file: Path | None = None,
    loggers: tuple[str, ...] = ROOT_LOGGERS,
) -> logging.Handler:
    """Install one shared handler on the project's top-level loggers.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        log_file: Log to this file instead of stderr when given
        loggers: Names of the loggers to configure

    Returns:
        logging.Handler: The installed handler
    """
    level = getattr(logging, log_level.upper())

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handler: logging.Handler = logging.FileHandler(log_file)
    else:
        handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(ISOFormatter())

    for name in loggers:
        logger = logging.getLogger(name)
        logger.setLevel(level)
        logger.handlers.clear()
        logger.addHandler(handler)

    return handler
