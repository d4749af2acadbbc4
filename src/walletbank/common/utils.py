"""
Common utilities shared by the API handlers
"""

import secrets
from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Optional, Type

TOKEN_BYTES = 32


def generate_token() -> str:
    """
    Opaque session-style token: 32 random bytes, hex encoded.
    Not persisted anywhere.
    """
    return secrets.token_hex(TOKEN_BYTES)


def utcnow() -> datetime:
    """
    Naive UTC timestamp, the form stored in TIMESTAMP columns.
    """
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_float(value: Optional[Decimal]) -> Optional[float]:
    return float(value) if value is not None else None


def to_iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


class TransactionType(str, Enum):
    """Recognized ledger entry types. Other values are stored as given."""

    DEPOSIT = "deposit"
    WITHDRAWAL = "withdrawal"
    TRANSFER = "transfer"


class TransactionStatus(str, Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"


class LoanStatus(str, Enum):
    APPROVED = "approved"
    ACTIVE = "active"
    REPAID = "repaid"
    DEFAULTED = "defaulted"


def normalize_label(value: str, enum_cls: Type[Enum]) -> str:
    """
    Canonicalise a free-form type/status label.
    Known labels (any case) map to their enum value; unknown labels are only trimmed.
    """
    label = value.strip()
    try:
        return enum_cls(label.lower()).value
    except ValueError:
        return label
