"""
Logging Configuration Module.

Every module logs through a child of the ``dtr_extraction`` logger, so
one call to setup_logger() sets console and file output for the whole
pipeline and set_level() can adjust it afterwards (--debug / --quiet).

Usage:
    from src.utils.logger import setup_logger, get_logger

    setup_logger()
    logger = get_logger(__name__)
    logger.info("Extracting DTR...")
"""

import logging
import logging.handlers
import sys
from pathlib import Path
from typing import Optional, Union

import colorama
from colorama import Fore, Style

colorama.init()

ROOT_LOGGER_NAME = "dtr_extraction"

DEFAULT_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DEFAULT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class ColoredFormatter(logging.Formatter):
    """
    Console formatter that colors the level name only.

    Message text stays uncolored so OCR snippets quoted in log lines
    remain readable when copied.
    """

    LEVEL_COLORS = {
        logging.DEBUG: Fore.CYAN,
        logging.INFO: Fore.GREEN,
        logging.WARNING: Fore.YELLOW,
        logging.ERROR: Fore.RED,
        logging.CRITICAL: Fore.RED + Style.BRIGHT,
    }

    def format(self, record: logging.LogRecord) -> str:
        original = record.levelname
        color = self.LEVEL_COLORS.get(record.levelno)
        if color:
            record.levelname = f"{color}{original}{Style.RESET_ALL}"
        try:
            return super().format(record)
        finally:
            record.levelname = original


def _to_level(level: Union[str, int]) -> int:
    if isinstance(level, int):
        return level
    return getattr(logging, str(level).upper(), logging.INFO)


def _console_handler(log_format: str, date_format: str, colorize: bool) -> logging.Handler:
    handler = logging.StreamHandler(sys.stdout)
    use_color = colorize and hasattr(sys.stdout, "isatty") and sys.stdout.isatty()
    formatter_cls = ColoredFormatter if use_color else logging.Formatter
    handler.setFormatter(formatter_cls(log_format, datefmt=date_format))
    return handler


def _file_handler(
    log_file: Union[str, Path],
    log_format: str,
    date_format: str,
    max_bytes: int,
    backup_count: int
) -> logging.Handler:
    log_path = Path(log_file)
    log_path.parent.mkdir(parents=True, exist_ok=True)

    handler = logging.handlers.RotatingFileHandler(
        log_path,
        maxBytes=max_bytes,
        backupCount=backup_count,
        encoding='utf-8'
    )
    handler.setFormatter(logging.Formatter(log_format, datefmt=date_format))
    return handler


def setup_logger(
    level: Union[str, int] = "INFO",
    log_format: Optional[str] = None,
    date_format: Optional[str] = None,
    log_file: Optional[str] = None,
    max_bytes: int = 10485760,  # 10 MB
    backup_count: int = 5,
    colorize: bool = True
) -> logging.Logger:
    """
    Configure the ``dtr_extraction`` logger.

    Calling it again replaces the previous handlers.

    Args:
        level: Logging level name or number.
        log_format: Record format string.
        date_format: Timestamp format string.
        log_file: Path of a rotating log file; None disables file logging.
        max_bytes: Log file size that triggers rotation.
        backup_count: Rotated files to keep.
        colorize: Color level names when the console is a terminal.

    Returns:
        The configured project logger.

    Example:
        >>> setup_logger(level="DEBUG", log_file="logs/dtr.log")
    """
    log_format = log_format or DEFAULT_FORMAT
    date_format = date_format or DEFAULT_DATE_FORMAT

    root_logger = logging.getLogger(ROOT_LOGGER_NAME)

    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
        handler.close()

    root_logger.addHandler(_console_handler(log_format, date_format, colorize))

    if log_file:
        root_logger.addHandler(
            _file_handler(log_file, log_format, date_format, max_bytes, backup_count)
        )

    root_logger.propagate = False
    set_level(level)

    root_logger.debug(f"Logging initialized (level={logging.getLevelName(root_logger.level)})")
    return root_logger


def set_level(level: Union[str, int]) -> None:
    """Change the level of the project logger and all of its handlers."""
    numeric = _to_level(level)
    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.setLevel(numeric)
    for handler in root_logger.handlers:
        handler.setLevel(numeric)


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger under the ``dtr_extraction`` namespace.

    Example:
        >>> get_logger("src.extraction.extractor").name
        'dtr_extraction.src.extraction.extractor'
    """
    if name == ROOT_LOGGER_NAME or name.startswith(ROOT_LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


def setup_logger_from_config() -> logging.Logger:
    """Initialize logging from the ``logging`` section of the configuration."""
    from config import get_config

    log_file = None
    if get_config("logging.file.enabled", False):
        log_file = get_config("logging.file.path")

    return setup_logger(
        level=get_config("logging.level", "INFO"),
        log_format=get_config("logging.format"),
        date_format=get_config("logging.date_format"),
        log_file=log_file,
        max_bytes=get_config("logging.file.max_bytes", 10485760),
        backup_count=get_config("logging.file.backup_count", 5),
        colorize=get_config("logging.console.colorize", True)
    )
