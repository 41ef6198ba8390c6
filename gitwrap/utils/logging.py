"""Console and file logging for the gitwrap command line."""

import logging
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

ROOT_LOGGER = "gitwrap"

FILE_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def _console_handler(level: int, verbose: bool) -> RichHandler:
    handler = RichHandler(
        console=Console(stderr=True),
        show_time=verbose,
        show_path=verbose,
        rich_tracebacks=True,
        markup=False,
    )
    handler.setLevel(level)
    return handler


def _file_handler(log_file: Path) -> logging.FileHandler:
    log_file.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(log_file, encoding="utf-8")
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(logging.Formatter(FILE_FORMAT))
    return handler


def setup_logging(
    level: int = logging.WARNING,
    log_file: Optional[Path] = None,
    verbose: bool = False,
) -> logging.Logger:
    """Route records from the ``gitwrap`` logger tree to stderr and a file.

    Records of every git invocation are emitted at DEBUG by the runner, so
    ``verbose`` shows each command line on the console. A log file always
    receives DEBUG records, whatever the console level.

    Calling this again replaces the handlers installed by the previous call.

    Args:
        level: Console threshold.
        log_file: Optional file that receives every record.
        verbose: Shorthand for ``level=logging.DEBUG`` with timestamps.

    Returns:
        The ``gitwrap`` root logger.
    """
    if verbose:
        level = logging.DEBUG

    logger = logging.getLogger(ROOT_LOGGER)
    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()

    logger.addHandler(_console_handler(level, verbose))
    if log_file:
        logger.addHandler(_file_handler(log_file))

    logger.setLevel(logging.DEBUG if log_file else level)
    return logger


class LogCapture:
    """Collect records from a logger for the duration of a ``with`` block."""

    def __init__(self, logger_name: str = ROOT_LOGGER, level: int = logging.DEBUG):
        self.logger_name = logger_name
        self.level = level
        self.records: list[logging.LogRecord] = []
        self._handler: Optional[logging.Handler] = None
        self._previous_level: Optional[int] = None

    def __enter__(self) -> "LogCapture":
        logger = logging.getLogger(self.logger_name)
        self._handler = CaptureHandler(self.records)
        self._previous_level = logger.level
        logger.setLevel(self.level)
        logger.addHandler(self._handler)
        return self

    def __exit__(self, *args) -> None:
        logger = logging.getLogger(self.logger_name)
        if self._handler:
            logger.removeHandler(self._handler)
        if self._previous_level is not None:
            logger.setLevel(self._previous_level)

    @property
    def messages(self) -> list[str]:
        return [record.getMessage() for record in self.records]

    def has_message(self, substring: str) -> bool:
        return any(substring in msg for msg in self.messages)


class CaptureHandler(logging.Handler):
    """Appends every record it receives to a list."""

    def __init__(self, records: list[logging.LogRecord]):
        super().__init__()
        self.records = records

    def emit(self, record: logging.LogRecord) -> None:
        self.records.append(record)
