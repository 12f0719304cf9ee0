"""Logging for native migrator.

All package loggers hang off the ``native_migrator`` logger, which owns the
console and (optional) file handlers. Modules get theirs with::

    logger = get_logger().get_logger(__name__)

Migration steps are reported through the Logger helpers so every step line
has the same ``[started]`` / ``[completed]`` / ``[failed]`` shape.
"""

import logging
import sys
from typing import Optional
from pathlib import Path
from .colors import Colors

ROOT_LOGGER_NAME = 'native_migrator'

FILE_FORMAT = '%(asctime)s [%(levelname)s] %(name)s: %(message)s'
FILE_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


class ColoredFormatter(logging.Formatter):
    """
    Console formatter printing `[info] message` style lines.

    INFO keeps the terminal's default color; other levels are colored.
    """

    LEVEL_COLORS = {
        logging.DEBUG: Colors.OKCYAN,
        logging.INFO: '',
        logging.WARNING: Colors.WARNING,
        logging.ERROR: Colors.FAIL,
        logging.CRITICAL: Colors.FAIL + Colors.BOLD,
    }

    LEVEL_PREFIXES = {
        logging.DEBUG: '[debug]',
        logging.INFO: '[info]',
        logging.WARNING: '[warn]',
        logging.ERROR: '[error]',
        logging.CRITICAL: '[fatal]',
    }

    def __init__(self, fmt: Optional[str] = None, use_colors: bool = True, use_prefixes: bool = True):
        super().__init__(fmt)
        self.use_colors = use_colors
        self.use_prefixes = use_prefixes

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)

        prefix = self.LEVEL_PREFIXES.get(record.levelno, '') if self.use_prefixes else ''
        if prefix:
            message = f"{prefix} {message}"

        color = self.LEVEL_COLORS.get(record.levelno, '') if self.use_colors else ''
        if color:
            message = f"{color}{message}{Colors.ENDC}"

        return message


class Logger:
    """
    Owner of the package logger's handlers (singleton).

    Console output goes to stdout at INFO (DEBUG with verbose, WARNING with
    quiet). A log file, when configured, always receives DEBUG records
    without colors.
    """

    _instance: Optional['Logger'] = None
    _initialized: bool = False

    def __new__(cls) -> 'Logger':
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self):
        if Logger._initialized:
            return

        self._logger = logging.getLogger(ROOT_LOGGER_NAME)
        self._logger.setLevel(logging.DEBUG)
        self._logger.handlers = []

        self._console_handler = self._console(logging.INFO, use_colors=True)
        self._logger.addHandler(self._console_handler)
        self._file_handler: Optional[logging.FileHandler] = None

        Logger._initialized = True

    @staticmethod
    def _console(level: int, use_colors: bool) -> logging.StreamHandler:
        handler = logging.StreamHandler(sys.stdout)
        handler.setLevel(level)
        handler.setFormatter(ColoredFormatter(fmt='%(message)s', use_colors=use_colors))
        return handler

    @staticmethod
    def _file(file_path: Path) -> logging.FileHandler:
        file_path.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(file_path, encoding='utf-8')
        handler.setLevel(logging.DEBUG)
        handler.setFormatter(logging.Formatter(fmt=FILE_FORMAT, datefmt=FILE_DATE_FORMAT))
        return handler

    def configure(
        self,
        verbose: bool = False,
        quiet: bool = False,
        log_file: Optional[Path] = None,
        use_colors: bool = True
    ) -> None:
        """
        Replace the console handler and optionally add a file handler.

        Args:
            verbose: DEBUG on the console
            quiet: WARNING and above on the console (wins over verbose)
            log_file: Also log to this file
            use_colors: Use ANSI colors on the console
        """
        if quiet:
            level = logging.WARNING
        elif verbose:
            level = logging.DEBUG
        else:
            level = logging.INFO

        self._logger.removeHandler(self._console_handler)
        self._console_handler = self._console(level, use_colors)
        self._logger.addHandler(self._console_handler)

        if log_file:
            if self._file_handler:
                self._logger.removeHandler(self._file_handler)
                self._file_handler.close()
            self._file_handler = self._file(Path(log_file))
            self._logger.addHandler(self._file_handler)

    def get_logger(self, name: Optional[str] = None) -> logging.Logger:
        """
        Return a logger under the package logger.

        Accepts a module ``__name__`` (``native_migrator.core.migrator``) or
        a short name (``migrator``); no name gives the package logger.
        """
        if not name:
            return self._logger
        if name == ROOT_LOGGER_NAME or name.startswith(ROOT_LOGGER_NAME + '.'):
            return logging.getLogger(name)
        return logging.getLogger(f'{ROOT_LOGGER_NAME}.{name}')

    # Step reporting
    def started(self, description: str) -> None:
        self._logger.info("%s %s", Colors.info('[started]'), description)

    def completed(self, description: str, elapsed_ms: float) -> None:
        self._logger.info("%s %s in %.2fms", Colors.success('[completed]'), description, elapsed_ms)

    def failed(self, description: str, error: object) -> None:
        self._logger.error("%s %s: %s", Colors.error('[failed]'), description, error)

    def success(self, msg: str, *args) -> None:
        self._logger.info(f"{Colors.success('[success]')} {msg}", *args)

    def dry_run(self, msg: str, *args) -> None:
        """Log an action that dry-run mode skipped."""
        self._logger.info(f"{Colors.info('[DRY RUN]')} {msg}", *args)


_logger: Optional[Logger] = None


def get_logger() -> Logger:
    """Get the global Logger, creating it on first use."""
    global _logger
    if _logger is None:
        _logger = Logger()
    return _logger


def configure_logging(
    verbose: bool = False,
    quiet: bool = False,
    log_file: Optional[Path] = None,
    use_colors: bool = True
) -> None:
    """Configure the global Logger (see Logger.configure)."""
    get_logger().configure(verbose=verbose, quiet=quiet, log_file=log_file, use_colors=use_colors)


def reset_logger() -> None:
    """Close the handlers and forget the global Logger (mainly for testing)."""
    global _logger
    if _logger is not None:
        for handler in _logger._logger.handlers[:]:
            handler.close()
            _logger._logger.removeHandler(handler)
    _logger = None
    Logger._instance = None
    Logger._initialized = False
