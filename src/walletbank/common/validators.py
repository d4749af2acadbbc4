"""
Common validation and input-cleaning utilities
"""

import html
import re
from typing import Any, Optional

WALLET_ADDRESS_RE = re.compile(r"^0x[a-fA-F0-9]{40}$")
_TAG_RE = re.compile(r"<[^>]*>")


def validate_wallet_address(address: Any) -> bool:
    """
    Format check only: "0x" followed by 40 hex characters.
    No checksum or ownership proof.
    """
    return isinstance(address, str) and WALLET_ADDRESS_RE.fullmatch(address) is not None


def sanitize_input(value: Optional[str]) -> Optional[str]:
    """
    Trim, drop markup tags and HTML-escape a client supplied string.
    """
    if value is None:
        return None
    return html.escape(_TAG_RE.sub("", str(value).strip()), quote=True)


def sanitize_details(value: Any) -> Any:
    """
    Apply sanitize_input to every string inside a details blob.
    """
    if isinstance(value, str):
        return sanitize_input(value)
    if isinstance(value, dict):
        return {sanitize_input(str(k)): sanitize_details(v) for k, v in value.items()}
    if isinstance(value, list):
        return [sanitize_details(v) for v in value]
    return value
