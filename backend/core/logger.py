import logging
import os
import re
from logging.handlers import RotatingFileHandler
from pathlib import Path

# Matches password=..., "password": "...", googlePassword: ... in log messages
SECRET_PATTERN = re.compile(r"""(?i)(\w*password["']?\s*[:=]\s*["']?)[^"',\s}]+""")


class RedactPasswordsFilter(logging.Filter):
    """Mask password values that end up in a log message."""

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        redacted = SECRET_PATTERN.sub(r'\1***', message)
        if redacted != message:
            record.msg = redacted
            record.args = None
        return True


def setup_logger(name: str = 'student_accounts', log_level: str = None):
    """Setup application logger"""
    logger = logging.getLogger(name)

    # Don't add handlers if they already exist
    if logger.handlers:
        return logger

    if log_level is None:
        log_level = os.getenv('LOG_LEVEL', 'INFO').upper()
    level = getattr(logging, log_level, logging.INFO)
    logger.setLevel(level)
    logger.addFilter(RedactPasswordsFilter())

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    # Hosts with a read-only filesystem set LOG_TO_FILE=false
    if os.getenv('LOG_TO_FILE', 'true').lower() != 'false':
        log_dir = Path(os.getenv('LOG_DIR') or Path(__file__).resolve().parent.parent / 'logs')
        log_dir.mkdir(parents=True, exist_ok=True)

        file_handler = RotatingFileHandler(
            log_dir / 'app.log',
            maxBytes=10 * 1024 * 1024,  # 10MB
            backupCount=5
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger

# Create default logger instance
logger = setup_logger()
