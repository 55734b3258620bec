"""Tests for portsniff/logger.py"""

import logging
import logging.handlers
from unittest.mock import Mock, patch

import pytest

from portsniff.logger import (
    PortSniffLogger, ColoredFormatter, get_logger, setup_logging
)


def make_record(level=logging.INFO, msg='Test message'):
    return logging.LogRecord(
        name='test', level=level, pathname='', lineno=0,
        msg=msg, args=(), exc_info=None
    )


class TestColoredFormatter:
    """Test cases for ColoredFormatter"""

    def test_format_without_colors(self):
        """Test formatting with colors disabled"""
        formatter = ColoredFormatter('%(levelname)s - %(message)s', use_colors=False)
        result = formatter.format(make_record(logging.ERROR))
        assert result == 'ERROR - Test message'

    def test_format_with_colors(self):
        """Test formatting wraps colored levels in escape codes"""
        with patch('portsniff.logger.Style') as mock_style:
            mock_style.RESET_ALL = '\033[0m'
            formatter = ColoredFormatter('%(levelname)s - %(message)s')
            formatter.COLORS = dict(formatter.COLORS, ERROR='\033[31m')

            result = formatter.format(make_record(logging.ERROR))

        assert result.startswith('\033[31m')
        assert result.endswith('\033[0m')

    def test_info_is_uncolored(self):
        """INFO messages are printed as-is"""
        formatter = ColoredFormatter('%(message)s')
        assert formatter.format(make_record(logging.INFO)) == 'Test message'


class TestPortSniffLogger:
    """Test cases for PortSniffLogger"""

    def test_parse_size_mb(self):
        assert PortSniffLogger._parse_size('10MB') == 10 * 1024 * 1024

    def test_parse_size_kb(self):
        assert PortSniffLogger._parse_size('500KB') == 500 * 1024

    def test_parse_size_gb(self):
        assert PortSniffLogger._parse_size('2GB') == 2 * 1024 * 1024 * 1024

    def test_parse_size_bytes(self):
        assert PortSniffLogger._parse_size('2048B') == 2048

    def test_parse_size_invalid(self):
        """Test parsing invalid size string returns default"""
        assert PortSniffLogger._parse_size('invalid') == 10 * 1024 * 1024

    def test_initialize_basic(self, tmp_path):
        """Test basic logger initialization"""
        PortSniffLogger.initialize(
            log_dir=str(tmp_path),
            console_level='DEBUG',
            file_level='INFO',
            console_simple_format=False,
            file_enabled=False
        )

        assert PortSniffLogger._initialized is True
        assert PortSniffLogger._log_dir == tmp_path
        assert PortSniffLogger._console_level == logging.DEBUG
        assert PortSniffLogger._file_level == logging.INFO

    def test_initialize_with_env(self, tmp_path):
        """Test logger initialization from environment configuration"""
        mock_env = Mock()
        mock_env.logs_dir = str(tmp_path / 'logs')
        mock_env.log_level = 'WARNING'
        mock_env.log_file_level = 'INFO'
        mock_env.log_simple_format = True
        mock_env.log_file_enabled = True
        mock_env.show_colors = False

        with patch('portsniff.logger.env', mock_env):
            PortSniffLogger.initialize()

        assert PortSniffLogger._console_level == logging.WARNING
        assert PortSniffLogger._file_enabled is True
        assert PortSniffLogger._use_colors is False
        assert (tmp_path / 'logs').is_dir()

    def test_logger_created_before_setup_gets_handlers(self):
        """Module level loggers are wired up when logging is configured"""
        logger = get_logger('portsniff.test_early')
        assert logger.handlers == []

        setup_logging(console_level='INFO', file_enabled=False)

        assert len(logger.handlers) == 1
        assert isinstance(logger.handlers[0], logging.StreamHandler)
        assert logger.handlers[0].level == logging.INFO
        assert logger.propagate is False

    def test_get_logger_is_cached(self):
        assert get_logger('portsniff.test_cached') is get_logger('portsniff.test_cached')

    def test_get_logger_with_file(self, tmp_path):
        """File logging adds a rotating handler"""
        setup_logging(log_dir=str(tmp_path), file_enabled=True)
        logger = get_logger('portsniff.test_file')

        file_handlers = [h for h in logger.handlers
                         if isinstance(h, logging.handlers.RotatingFileHandler)]
        assert len(file_handlers) == 1
        logger.debug('written to file')
        file_handlers[0].flush()
        assert 'written to file' in (tmp_path / 'portsniff.log').read_text()

    def test_file_and_console_levels(self, tmp_path):
        """Console and file handlers filter independently"""
        setup_logging(log_dir=str(tmp_path), console_level='ERROR', file_level='DEBUG', file_enabled=True)
        logger = get_logger('portsniff.test_level')

        levels = {type(h): h.level for h in logger.handlers}
        assert levels[logging.StreamHandler] == logging.ERROR
        assert levels[logging.handlers.RotatingFileHandler] == logging.DEBUG

    def test_handlers_shared_between_loggers(self, tmp_path):
        """Every logger writes through the same rotating file handler"""
        setup_logging(log_dir=str(tmp_path), file_enabled=True)
        first = get_logger('portsniff.test_shared_a')
        second = get_logger('portsniff.test_shared_b')

        assert first.handlers == second.handlers

    def test_reset_keeps_registry(self):
        """reset() drops handlers but keeps registered loggers"""
        setup_logging(console_level='INFO')
        logger = get_logger('portsniff.test_reset')
        PortSniffLogger.reset()

        assert logger.handlers == []
        assert get_logger('portsniff.test_reset') is logger
        assert PortSniffLogger._initialized is False

    def test_invalid_level(self):
        with pytest.raises(AttributeError):
            setup_logging(console_level='LOUD')
