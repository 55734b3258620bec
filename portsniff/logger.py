"""
Unified Logging System

Provides centralized logging for PortSniff with:
- Colorized console output
- Configurable log levels and formats
- Optional rotating log file
"""

import sys
import logging
import logging.handlers
from pathlib import Path
from typing import Optional, Dict, List

import colorama
from colorama import Fore, Style

from .env import env

colorama.just_fix_windows_console()


class ColoredFormatter(logging.Formatter):
    """Custom formatter with colors for console output"""

    COLORS = {
        'DEBUG': Fore.CYAN,
        'INFO': '',  # No color for INFO logs (default)
        'WARNING': Fore.YELLOW,
        'ERROR': Fore.RED,
        'CRITICAL': Fore.RED + Style.BRIGHT,
    }

    def __init__(self, fmt: Optional[str] = None, datefmt: Optional[str] = None, use_colors: bool = True):
        super().__init__(fmt, datefmt)
        self.use_colors = use_colors

    def format(self, record):
        formatted = super().format(record)

        if self.use_colors:
            color = self.COLORS.get(record.levelname, '')
            if color:
                return f"{color}{formatted}{Style.RESET_ALL}"

        return formatted


class PortSniffLogger:
    """Unified logger for PortSniff modules"""

    _loggers: Dict[str, logging.Logger] = {}
    _initialized: bool = False
    _log_dir: Optional[Path] = None
    _console_level: int = logging.INFO
    _file_level: int = logging.DEBUG
    _console_simple_format: bool = True
    _file_enabled: bool = False
    _use_colors: bool = True
    _handlers: List[logging.Handler] = []

    @classmethod
    def _parse_size(cls, size_str: str) -> int:
        """Parse size string like '10MB' to bytes"""
        size_str = size_str.upper().strip()
        # Longest suffixes first so '10MB' is not read as '10M' + 'B'
        multipliers = {
            'GB': 1024 * 1024 * 1024,
            'MB': 1024 * 1024,
            'KB': 1024,
            'B': 1,
        }

        for suffix, multiplier in multipliers.items():
            if size_str.endswith(suffix):
                number_str = size_str[:-len(suffix)].strip()
                try:
                    return int(float(number_str) * multiplier)
                except ValueError:
                    break

        # Default to 10MB if parsing fails
        return 10 * 1024 * 1024

    @classmethod
    def initialize(cls, log_dir: Optional[str] = None,
                   console_level: Optional[str] = None,
                   file_level: Optional[str] = None,
                   console_simple_format: Optional[bool] = None,
                   file_enabled: Optional[bool] = None,
                   use_colors: Optional[bool] = None) -> None:
        """Initialize the logging system with environment variable support"""
        if cls._initialized:
            return

        cls._log_dir = Path(log_dir) if log_dir else Path(env.logs_dir)
        cls._console_level = getattr(logging, (console_level or env.log_level).upper())
        cls._file_level = getattr(logging, (file_level or env.log_file_level).upper())
        cls._console_simple_format = (console_simple_format
            if console_simple_format is not None else env.log_simple_format)
        cls._file_enabled = file_enabled if file_enabled is not None else env.log_file_enabled
        cls._use_colors = use_colors if use_colors is not None else env.show_colors

        if cls._file_enabled:
            cls._log_dir.mkdir(parents=True, exist_ok=True)

        cls._initialized = True

    @classmethod
    def get_logger(cls, name: str) -> logging.Logger:
        """
        Get or create a logger instance

        Args:
            name: Logger name (usually module name)

        Returns:
            Configured logger instance
        """
        if name in cls._loggers:
            return cls._loggers[name]

        logger = logging.getLogger(name)
        # Set logger to the lowest level, let handlers control actual filtering
        logger.setLevel(logging.DEBUG)
        logger.handlers.clear()

        for handler in cls._handlers:
            logger.addHandler(handler)

        # Prevent propagation to avoid duplicate logs
        logger.propagate = False

        cls._loggers[name] = logger
        return logger

    @classmethod
    def _build_handlers(cls) -> List[logging.Handler]:
        """Console and optional file handler shared by every PortSniff logger"""
        handlers: List[logging.Handler] = []

        # Console handler with colors
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(cls._console_level)

        if cls._console_simple_format:
            console_formatter = ColoredFormatter('%(message)s', use_colors=cls._use_colors)
        else:
            console_formatter = ColoredFormatter(
                '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
                datefmt='%H:%M:%S',
                use_colors=cls._use_colors
            )
        console_handler.setFormatter(console_formatter)
        handlers.append(console_handler)

        # File handler (only if file logging is enabled)
        if cls._file_enabled:
            file_handler = logging.handlers.RotatingFileHandler(
                cls._log_dir / 'portsniff.log',
                maxBytes=cls._parse_size(env.log_max_size),
                backupCount=env.log_max_files,
                encoding='utf-8'
            )
            file_handler.setLevel(cls._file_level)
            file_handler.setFormatter(logging.Formatter(
                '%(asctime)s - %(name)s - %(threadName)s - %(levelname)s - %(message)s'
            ))
            handlers.append(file_handler)

        return handlers

    @classmethod
    def _close_handlers(cls) -> None:
        for logger in cls._loggers.values():
            logger.handlers.clear()
        for handler in cls._handlers:
            handler.close()
        cls._handlers = []

    @classmethod
    def configure(cls, **kwargs) -> None:
        """Re-initialize with new settings and rebuild handlers of existing loggers"""
        cls._close_handlers()
        cls._initialized = False
        cls.initialize(**kwargs)
        cls._handlers = cls._build_handlers()
        for logger in cls._loggers.values():
            for handler in cls._handlers:
                logger.addHandler(handler)

    @classmethod
    def reset(cls) -> None:
        """Drop all handlers and forget the configuration; registered loggers are kept"""
        cls._close_handlers()
        cls._initialized = False
        cls._console_level = logging.INFO
        cls._log_dir = None


# Convenience functions for easy access
def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance

    Loggers created at import time get their handlers once setup_logging()
    runs.

    Example:
        logger = get_logger(__name__)
    """
    return PortSniffLogger.get_logger(name)


def setup_logging(log_dir: Optional[str] = None,
                  console_level: Optional[str] = None,
                  file_level: Optional[str] = None,
                  console_simple_format: Optional[bool] = None,
                  file_enabled: Optional[bool] = None,
                  use_colors: Optional[bool] = None) -> None:
    """
    Configure the logging system, overriding environment defaults

    Example:
        setup_logging()  # Use all environment defaults
        setup_logging(console_level='DEBUG')
        setup_logging(log_dir='/custom/log/path', file_enabled=True)
    """
    PortSniffLogger.configure(
        log_dir=log_dir,
        console_level=console_level,
        file_level=file_level,
        console_simple_format=console_simple_format,
        file_enabled=file_enabled,
        use_colors=use_colors
    )

