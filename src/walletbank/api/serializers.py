from typing import Any, Dict

from walletbank.common.utils import to_float, to_iso
from walletbank.db.models import Loan, Transaction, User


def serialize_user(u: User) -> Dict[str, Any]:
    return {
        "id": u.id,
        "wallet_address": u.wallet_address,
        "email": u.email,
        "bank_balance": to_float(u.bank_balance) or 0.0,
        "created_at": to_iso(u.created_at),
        "updated_at": to_iso(u.updated_at),
    }


def serialize_tx(t: Transaction) -> Dict[str, Any]:
    return {
        "id": t.id,
        "user_id": t.user_id,
        "transaction_type": t.transaction_type,
        "amount": to_float(t.amount),
        "recipient_address": t.recipient_address,
        "transaction_hash": t.transaction_hash,
        "status": t.status,
        "details": t.details,
        "created_at": to_iso(t.created_at),
        "updated_at": to_iso(getattr(t, "updated_at", None)),
    }


def serialize_loan(l: Loan) -> Dict[str, Any]:
    return {
        "id": l.id,
        "user_id": l.user_id,
        "loan_amount": to_float(l.loan_amount),
        "interest_rate": to_float(l.interest_rate),
        "loan_term_days": l.loan_term_days,
        "total_repayment": to_float(l.total_repayment),
        "status": l.status,
        "created_at": to_iso(l.created_at),
        "updated_at": to_iso(getattr(l, "updated_at", None)),
        "due_date": to_iso(l.due_date),
    }
