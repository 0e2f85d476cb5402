"""Privacy-safe logging configuration for Maxinator.

By default, secrets (bot tokens, mini app secret keys, HMAC signatures) are
redacted. Set LOG_SENSITIVE=true to enable full logging for debugging.

Message text and launch parameters are NEVER logged regardless of settings.
"""

import logging
import os
import re
from typing import Iterable, Optional

import colorlog


def anonymize_token(token: str) -> str:
    """Anonymize a bot token or secret key to its first 4 characters.

    Args:
        token: Full token string

    Returns:
        First 4 characters followed by "..." (e.g., "f9LH...")
    """
    if not token:
        return "none"
    return f"{token[:4]}..."


def anonymize_id(value) -> str:
    """Anonymize a user or chat ID to its last 4 digits.

    Args:
        value: Numeric ID (int or str)

    Returns:
        "***" followed by last 4 digits (e.g., "***1234")
    """
    if value is None or value == "":
        return "none"
    digits = re.sub(r'\D', '', str(value))
    if len(digits) > 4:
        return f"***{digits[-4:]}"
    return "***"


class PrivacyFilter(logging.Filter):
    """Logging filter that redacts secrets unless LOG_SENSITIVE=true.

    Redacts:
    - HMAC-SHA256 hex digests (64 hex chars), e.g. launch parameter hashes
    - Any explicitly registered secret (bot token, secret key)
    """

    SIGNATURE_PATTERN = re.compile(r'\b[0-9a-fA-F]{64}\b')

    def __init__(self, sensitive_logging: bool = False, secrets: Optional[Iterable[str]] = None):
        super().__init__()
        self.sensitive_logging = sensitive_logging
        self.secrets = [s for s in (secrets or []) if s]

    def filter(self, record: logging.LogRecord) -> bool:
        """Filter log record, redacting secrets if needed."""
        if self.sensitive_logging:
            return True

        if hasattr(record, 'msg') and isinstance(record.msg, str):
            msg = record.msg
            for secret in self.secrets:
                msg = msg.replace(secret, anonymize_token(secret))
            msg = self.SIGNATURE_PATTERN.sub(lambda m: anonymize_token(m.group(0)), msg)
            record.msg = msg

        return True


def setup_logging(
    level: str = None,
    sensitive: bool = None,
    suppress_noisy: bool = True,
    secrets: Optional[Iterable[str]] = None,
) -> None:
    """Configure logging with colorlog and privacy filters.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR). Default from LOG_LEVEL env or INFO.
        sensitive: Enable sensitive data logging. Default from LOG_SENSITIVE env or False.
        suppress_noisy: Suppress noisy library logs (urllib3, requests). Default True.
        secrets: Literal values to redact from every record (token, secret key).
    """
    if level is None:
        level = os.getenv('LOG_LEVEL', 'INFO').upper()
    if sensitive is None:
        sensitive = os.getenv('LOG_SENSITIVE', 'false').lower() in ('true', '1', 'yes')

    handler = colorlog.StreamHandler()
    handler.setFormatter(colorlog.ColoredFormatter(
        '%(log_color)s%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S',
        log_colors={
            'DEBUG': 'cyan',
            'INFO': 'green',
            'WARNING': 'yellow',
            'ERROR': 'red',
            'CRITICAL': 'red,bg_white',
        }
    ))

    handler.addFilter(PrivacyFilter(sensitive_logging=sensitive, secrets=secrets))

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(getattr(logging, level, logging.INFO))

    if suppress_noisy:
        logging.getLogger('urllib3').setLevel(logging.WARNING)
        logging.getLogger('requests').setLevel(logging.WARNING)

    logger = logging.getLogger(__name__)
    logger.debug(f"Logging configured: level={level}, sensitive={sensitive}")


def get_logger(name: str) -> logging.Logger:
    """Get a logger with the given name.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured logger instance
    """
    return logging.getLogger(name)
