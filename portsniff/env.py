"""
Environment Management Module for PortSniff

Uses python-dotenv for environment variable management.

Usage:
    from portsniff.env import env

    print(env.default_threads)
    print(env.default_timeout)
    print(env.log_level)
"""

import os
from pathlib import Path
from typing import Any, Dict

from dotenv import load_dotenv

from .constants import DEFAULT_THREADS, DEFAULT_TIMEOUT


# Global constants
PORTSNIFF_VERSION = '0.1.0'

# Find PortSniff home and load its .env file
portsniff_home = Path(os.path.expanduser(os.getenv('PORTSNIFF_HOME', '~/.portsniff')))
env_file = portsniff_home / '.env'

# Load environment variables
if env_file.exists():
    load_dotenv(env_file)


def _get_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ('true', '1', 'yes', 'on')


def _get_int(name: str, default: int) -> int:
    try:
        return int(os.getenv(name, str(default)))
    except ValueError:
        return default


def _get_float(name: str, default: float) -> float:
    try:
        return float(os.getenv(name, str(default)))
    except ValueError:
        return default


class EnvConfig:
    """Environment configuration object"""

    @property
    def home_dir(self) -> str:
        return str(portsniff_home)

    @property
    def logs_dir(self) -> str:
        logs_dir = os.getenv('PORTSNIFF_PATHS_LOGS_DIR', 'logs')
        if not os.path.isabs(logs_dir):
            logs_dir = str(portsniff_home / logs_dir)
        return logs_dir

    @property
    def default_threads(self) -> int:
        return _get_int('PORTSNIFF_SCAN_THREADS', DEFAULT_THREADS)

    @property
    def default_timeout(self) -> float:
        return _get_float('PORTSNIFF_SCAN_TIMEOUT', DEFAULT_TIMEOUT)

    @property
    def show_progress(self) -> bool:
        return _get_bool('PORTSNIFF_UI_PROGRESS', True)

    @property
    def show_colors(self) -> bool:
        return _get_bool('PORTSNIFF_UI_COLOR', True)

    @property
    def log_level(self) -> str:
        return os.getenv('PORTSNIFF_LOGGING_CONSOLE_LEVEL', 'INFO')

    @property
    def log_file_enabled(self) -> bool:
        return _get_bool('PORTSNIFF_LOGGING_FILE_ENABLED', False)

    @property
    def log_file_level(self) -> str:
        return os.getenv('PORTSNIFF_LOGGING_FILE_LEVEL', 'DEBUG')

    @property
    def log_simple_format(self) -> bool:
        return _get_bool('PORTSNIFF_LOGGING_CONSOLE_SIMPLE_FORMAT', True)

    @property
    def log_max_files(self) -> int:
        return _get_int('PORTSNIFF_LOGGING_MAX_FILES', 5)

    @property
    def log_max_size(self) -> str:
        return os.getenv('PORTSNIFF_LOGGING_MAX_SIZE', '10MB')


# Global env object
env = EnvConfig()


def get_config_summary() -> Dict[str, Any]:
    """Get configuration summary"""
    return {
        'env_file': str(env_file),
        'env_file_exists': env_file.exists(),
        'scan': {
            'threads': env.default_threads,
            'timeout': env.default_timeout
        },
        'ui': {
            'progress': env.show_progress,
            'color': env.show_colors
        },
        'logging': {
            'console_level': env.log_level,
            'file_enabled': env.log_file_enabled,
            'file_level': env.log_file_level,
            'logs_dir': env.logs_dir
        }
    }
