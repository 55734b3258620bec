"""Tests for portsniff/env.py"""

from portsniff.constants import DEFAULT_THREADS, DEFAULT_TIMEOUT
from portsniff.env import env, get_config_summary


class TestEnvConfig:
    """Test cases for EnvConfig"""

    def test_defaults(self, monkeypatch):
        """Unset variables fall back to built-in defaults"""
        for name in ('PORTSNIFF_SCAN_THREADS', 'PORTSNIFF_SCAN_TIMEOUT',
                     'PORTSNIFF_UI_PROGRESS', 'PORTSNIFF_LOGGING_CONSOLE_LEVEL'):
            monkeypatch.delenv(name, raising=False)

        assert env.default_threads == DEFAULT_THREADS
        assert env.default_timeout == DEFAULT_TIMEOUT
        assert env.show_progress is True
        assert env.log_level == 'INFO'

    def test_scan_settings(self, mock_environment):
        mock_environment(PORTSNIFF_SCAN_THREADS=42, PORTSNIFF_SCAN_TIMEOUT='0.25')
        assert env.default_threads == 42
        assert env.default_timeout == 0.25

    def test_invalid_numbers_use_defaults(self, mock_environment):
        mock_environment(PORTSNIFF_SCAN_THREADS='many', PORTSNIFF_SCAN_TIMEOUT='soon')
        assert env.default_threads == DEFAULT_THREADS
        assert env.default_timeout == DEFAULT_TIMEOUT

    def test_booleans(self, mock_environment):
        mock_environment(PORTSNIFF_UI_PROGRESS='false', PORTSNIFF_UI_COLOR='0',
                         PORTSNIFF_LOGGING_FILE_ENABLED='yes')
        assert env.show_progress is False
        assert env.show_colors is False
        assert env.log_file_enabled is True

    def test_relative_logs_dir(self, mock_environment):
        """Relative log directories live under PORTSNIFF_HOME"""
        mock_environment(PORTSNIFF_PATHS_LOGS_DIR='mylogs')
        assert env.logs_dir.startswith(env.home_dir)
        assert env.logs_dir.endswith('mylogs')

    def test_absolute_logs_dir(self, mock_environment, tmp_path):
        mock_environment(PORTSNIFF_PATHS_LOGS_DIR=str(tmp_path))
        assert env.logs_dir == str(tmp_path)


class TestConfigSummary:
    """Test cases for get_config_summary"""

    def test_summary(self, mock_environment):
        mock_environment(PORTSNIFF_SCAN_THREADS=7)
        summary = get_config_summary()

        assert summary['scan']['threads'] == 7
        assert set(summary) == {'env_file', 'env_file_exists', 'scan', 'ui', 'logging'}
        assert summary['env_file_exists'] is False
