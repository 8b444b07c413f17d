"""Tests for input normalizers."""

from __future__ import annotations

import pytest

from airdrop.utils.validators import (
    normalize_handle,
    normalize_referral_code,
    validate_email_address,
    validate_tweet_url,
    validate_wallet_address,
)


@pytest.mark.parametrize("raw, expected", [
    ("@Foo_1", "foo_1"),
    ("foo_1", "foo_1"),
    ("  @VERM  ", "verm"),
    ("", None),
    (None, None),
])
def test_normalize_handle(raw, expected):
    assert normalize_handle(raw) == expected


@pytest.mark.parametrize("raw", ["@@double", "has space", "a" * 33, "dash-ed"])
def test_normalize_handle_rejects(raw):
    with pytest.raises(ValueError):
        normalize_handle(raw)


def test_wallet_address_alphabet_and_length():
    assert validate_wallet_address("So11111111111111111111111111111111111111112")
    for bad in ("0" * 44, "O" * 44, "l" * 32, "A" * 31, "A" * 45):
        with pytest.raises(ValueError):
            validate_wallet_address(bad)


def test_email_normalized():
    assert validate_email_address(" Holder@Mail.COM ") == "holder@mail.com"
    with pytest.raises(ValueError):
        validate_email_address("holder@")


def test_tweet_url_hosts():
    assert validate_tweet_url("https://x.com/a/status/1") == "https://x.com/a/status/1"
    for bad in ("https://twitter.com.evil.io/a", "ftp://twitter.com/a", "not a url", "https://xx.com/a"):
        with pytest.raises(ValueError):
            validate_tweet_url(bad)


def test_referral_code_normalized():
    assert normalize_referral_code(" AbC123 ") == "abc123"
    with pytest.raises(ValueError):
        normalize_referral_code("abc")
