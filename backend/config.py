"""
Ingestion Configuration - Environment-based settings

Environment Variables:
    INGEST_LOG_LEVEL: logging level name (default: 'INFO')

    INGEST_FILE_ENCODING: encoding used by the CLI to read broker files
        (default: 'utf-8-sig', which also drops a leading BOM)

    INGEST_MAX_ERRORS_SHOWN: int (default: 20)
        Number of row errors the CLI prints before truncating

    INGEST_PREVIEW_ROWS: int (default: 50)
        Number of configurations the CLI preview table shows

The parsing engine itself takes no configuration: alias tables and
heuristics are fixed per version. These settings only shape the CLI.
"""
import logging
import os

from dotenv import load_dotenv

from utils.normalize import to_int, ValidationError

load_dotenv()

logger = logging.getLogger(__name__)

VALID_LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')


def _get_int_setting(name: str, default: int) -> int:
    """Read a positive integer setting, falling back to default on bad input."""
    try:
        return to_int(os.getenv(name), default=default, minimum=1, field=name)
    except ValidationError as e:
        logger.warning(f"Invalid {name}: {e}. Using default {default}")
        return default


def _get_log_level() -> str:
    level = os.getenv('INGEST_LOG_LEVEL', 'INFO').strip().upper()
    if level not in VALID_LOG_LEVELS:
        logger.warning(f"Invalid INGEST_LOG_LEVEL '{level}', defaulting to 'INFO'")
        level = 'INFO'
    return level


class Config:
    LOG_LEVEL = _get_log_level()
    FILE_ENCODING = os.getenv('INGEST_FILE_ENCODING', 'utf-8-sig')
    MAX_ERRORS_SHOWN = _get_int_setting('INGEST_MAX_ERRORS_SHOWN', 20)
    PREVIEW_ROWS = _get_int_setting('INGEST_PREVIEW_ROWS', 50)

    LOG_FORMAT = '%(asctime)s [%(levelname)s] %(name)s: %(message)s'
    LOG_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

    @classmethod
    def reload(cls):
        """Re-read settings from the environment (used by tests)."""
        cls.LOG_LEVEL = _get_log_level()
        cls.FILE_ENCODING = os.getenv('INGEST_FILE_ENCODING', 'utf-8-sig')
        cls.MAX_ERRORS_SHOWN = _get_int_setting('INGEST_MAX_ERRORS_SHOWN', 20)
        cls.PREVIEW_ROWS = _get_int_setting('INGEST_PREVIEW_ROWS', 50)
        return cls
