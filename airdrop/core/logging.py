"""Logging setup and redaction of user-identifying request data"""

import logging
from typing import Any

from .config import settings

REDACTED = "[redacted]"

SENSITIVE_FIELDS = {
    "email",
    "twitter",
    "telegram",
    "tweet_url",
    "wallet_address",
    "wallet",
    "referee_wallet_address",
    "referrer_wallet_address",
}
SENSITIVE_FRAGMENTS = ("token", "key", "secret")

def setup_logging(level: str = None) -> None:
    """Configure root logging for the application"""
    log_level = (level or settings.LOG_LEVEL).upper()

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)

    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        handlers=[console_handler]
    )

def is_sensitive(key: str) -> bool:
    key = str(key).lower()
    if key in SENSITIVE_FIELDS:
        return True
    return any(fragment in key for fragment in SENSITIVE_FRAGMENTS)

def scrub_sensitive(value: Any) -> Any:
    """
    Return a copy of ``value`` with personal data and credentials replaced

    Dicts are walked recursively; lists are scrubbed element by element.
    Anything else is returned unchanged.
    """
    if isinstance(value, dict):
        return {
            k: REDACTED if is_sensitive(k) else scrub_sensitive(v)
            for k, v in value.items()
        }
    if isinstance(value, list):
        return [scrub_sensitive(item) for item in value]
    return value
