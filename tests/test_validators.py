"""
Tests for boundary helpers: wallet address format, sanitization, labels, tokens.
"""

from __future__ import annotations

import pytest

from walletbank.common.utils import (
    LoanStatus,
    TransactionStatus,
    TransactionType,
    generate_token,
    normalize_label,
)
from walletbank.common.validators import sanitize_details, sanitize_input, validate_wallet_address


@pytest.mark.parametrize(
    "address",
    [
        "0x" + "0" * 40,
        "0x" + "abcdef0123" * 4,
        "0x" + "ABCDEF0123" * 4,
        "0x52908400098527886E0F7030069857D2E4169EE7",
    ],
)
def test_valid_wallet_addresses(address):
    assert validate_wallet_address(address) is True


@pytest.mark.parametrize(
    "address",
    [
        "0x" + "a" * 39,  # too short
        "0x" + "a" * 41,  # too long
        "a" * 42,  # no prefix
        "0X" + "a" * 40,  # upper-case prefix
        "0x" + "g" * 40,  # non-hex
        "0x" + "a" * 39 + " ",
        " 0x" + "a" * 40,
        "0x" + "a" * 40 + "\n",
        "",
        None,
        12345,
    ],
)
def test_invalid_wallet_addresses(address):
    assert validate_wallet_address(address) is False


def test_sanitize_input_strips_tags_and_escapes():
    assert sanitize_input("  <script>alert(1)</script>hello  ") == "alert(1)hello"
    assert sanitize_input('a & "b"') == "a &amp; &quot;b&quot;"
    assert sanitize_input(None) is None
    assert sanitize_input("   ") == ""


def test_sanitize_details_walks_nested_values():
    blob = {"note": "<b>hi</b>", "tags": ["<i>x</i>", 3], "n": 1.5}
    assert sanitize_details(blob) == {"note": "hi", "tags": ["x", 3], "n": 1.5}
    assert sanitize_details(None) is None


def test_normalize_label_open_enums():
    assert normalize_label(" Deposit ", TransactionType) == "deposit"
    assert normalize_label("COMPLETED", TransactionStatus) == "completed"
    assert normalize_label("active", LoanStatus) == "active"
    # unknown labels are kept as given, only trimmed
    assert normalize_label("AirDrop ", TransactionType) == "AirDrop"
    assert normalize_label("On-Hold", TransactionStatus) == "On-Hold"


def test_generate_token_is_fresh_hex():
    a, b = generate_token(), generate_token()
    assert len(a) == 64
    int(a, 16)
    assert a != b
