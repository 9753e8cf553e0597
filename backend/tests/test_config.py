"""
Tests for environment-based ingestion settings.
"""

import pytest

from config import Config


@pytest.fixture(autouse=True)
def restore_config(monkeypatch):
    """Every test starts from a clean environment and leaves Config reloaded."""
    for name in ('INGEST_LOG_LEVEL', 'INGEST_FILE_ENCODING',
                 'INGEST_MAX_ERRORS_SHOWN', 'INGEST_PREVIEW_ROWS'):
        monkeypatch.delenv(name, raising=False)
    yield
    monkeypatch.undo()
    Config.reload()


class TestDefaults:

    def test_defaults(self):
        Config.reload()
        assert Config.LOG_LEVEL == 'INFO'
        assert Config.FILE_ENCODING == 'utf-8-sig'
        assert Config.MAX_ERRORS_SHOWN == 20
        assert Config.PREVIEW_ROWS == 50


class TestOverrides:

    def test_int_settings_from_env(self, monkeypatch):
        monkeypatch.setenv('INGEST_MAX_ERRORS_SHOWN', '5')
        monkeypatch.setenv('INGEST_PREVIEW_ROWS', '10')
        Config.reload()
        assert Config.MAX_ERRORS_SHOWN == 5
        assert Config.PREVIEW_ROWS == 10

    def test_log_level_is_case_insensitive(self, monkeypatch):
        monkeypatch.setenv('INGEST_LOG_LEVEL', 'debug')
        Config.reload()
        assert Config.LOG_LEVEL == 'DEBUG'

    def test_encoding_override(self, monkeypatch):
        monkeypatch.setenv('INGEST_FILE_ENCODING', 'latin-1')
        Config.reload()
        assert Config.FILE_ENCODING == 'latin-1'


class TestInvalidValues:
    """Bad values fall back to defaults instead of failing at import."""

    @pytest.mark.parametrize("value", ["abc", "0", "-3", "2.5"])
    def test_bad_int_falls_back(self, monkeypatch, value):
        monkeypatch.setenv('INGEST_PREVIEW_ROWS', value)
        Config.reload()
        assert Config.PREVIEW_ROWS == 50

    def test_unknown_log_level_falls_back(self, monkeypatch):
        monkeypatch.setenv('INGEST_LOG_LEVEL', 'LOUD')
        Config.reload()
        assert Config.LOG_LEVEL == 'INFO'
