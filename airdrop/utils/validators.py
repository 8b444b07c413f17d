"""Custom validators and normalizers"""

import re
from typing import Optional
from urllib.parse import urlparse
from email_validator import validate_email, EmailNotValidError

# Base58 alphabet (no 0, O, I, l), 32-44 characters
WALLET_ADDRESS_PATTERN = re.compile(r"^[1-9A-HJ-NP-Za-km-z]{32,44}$")

# Twitter / Telegram handle, optional leading @
HANDLE_PATTERN = re.compile(r"^@?[A-Za-z0-9_]{1,32}$")

REFERRAL_CODE_PATTERN = re.compile(r"^[a-z0-9]{4,64}$")

TWITTER_HOSTS = {
    "twitter.com",
    "www.twitter.com",
    "mobile.twitter.com",
    "x.com",
    "www.x.com",
    "mobile.x.com",
}

def validate_email_address(email: str) -> str:
    """Validate and normalize email"""
    email = email.strip().lower()

    try:
        validation = validate_email(email, check_deliverability=False)
        return validation.normalized.lower()
    except EmailNotValidError as e:
        raise ValueError(str(e))

def validate_wallet_address(wallet_address: str) -> str:
    wallet_address = wallet_address.strip()
    if not WALLET_ADDRESS_PATTERN.match(wallet_address):
        raise ValueError("Invalid wallet address")
    return wallet_address

def normalize_handle(handle: Optional[str]) -> Optional[str]:
    """
    Validate a social handle and strip it to its canonical form

    Empty input means the handle was not provided. ``"@Foo_1"`` becomes
    ``"foo_1"``.
    """
    if handle is None:
        return None

    handle = handle.strip()
    if not handle:
        return None

    if not HANDLE_PATTERN.match(handle):
        raise ValueError("Handle must be 1-32 letters, numbers or underscores")

    return handle.lstrip("@").lower()

def validate_tweet_url(url: str) -> str:
    """Require an http(s) URL on a Twitter/X host"""
    url = url.strip()
    parsed = urlparse(url)

    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ValueError("Invalid URL")

    host = (parsed.hostname or "").lower()
    if host not in TWITTER_HOSTS:
        raise ValueError("Tweet URL must be on twitter.com or x.com")

    return url

def normalize_referral_code(code: str) -> str:
    code = code.strip().lower()
    if not REFERRAL_CODE_PATTERN.match(code):
        raise ValueError("Referral code must be 4-64 letters or digits")
    return code
