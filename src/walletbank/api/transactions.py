from typing import Optional

from fastapi import APIRouter, Depends, Query

from walletbank.common.utils import TransactionStatus, TransactionType, normalize_label
from walletbank.common.validators import sanitize_details, sanitize_input
from walletbank.db.transactions import TransactionManager
from walletbank.db.users import UserManager
from walletbank.errors import NotFoundError, StorageError, ValidationError
from walletbank.logging_config import get_logger
from .deps import get_transaction_manager, get_user_manager, require_user
from .schemas import (
    StatusUpdate,
    TransactionCreate,
    TransactionList,
    TransactionRecorded,
    TransactionStatusUpdated,
)
from .serializers import serialize_tx

logger = get_logger("walletbank.api.transactions")

router = APIRouter(tags=["transactions"])


@router.get("/transactions", response_model=TransactionList)
async def list_transactions(
    wallet_address: Optional[str] = None,
    limit: Optional[int] = Query(None, ge=1, le=500),
    users: UserManager = Depends(get_user_manager),
    ledger: TransactionManager = Depends(get_transaction_manager),
):
    """
    Most recent transactions for a wallet, newest first.
    """
    user = await require_user(users, wallet_address)
    logger.info("Fetching transactions user_id=%s limit=%s", user.id, limit)
    txs = await ledger.get_user_transactions(user.id, limit=limit)
    return {"transactions": [serialize_tx(t) for t in txs]}


@router.post("/transactions", response_model=TransactionRecorded)
async def record_transaction(
    payload: TransactionCreate,
    users: UserManager = Depends(get_user_manager),
    ledger: TransactionManager = Depends(get_transaction_manager),
):
    """
    Record a ledger entry. Deposits also credit the cached balance.

    The amount is taken as given: withdrawals and transfers do not debit the
    balance and nothing is checked against it.
    """
    tx_type = sanitize_input(payload.type)
    if not tx_type:
        raise ValidationError("Missing required fields")
    tx_type = normalize_label(tx_type, TransactionType)

    user = await require_user(users, payload.wallet_address)

    status = sanitize_input(payload.status)
    record = {
        "user_id": user.id,
        "type": tx_type,
        "amount": payload.amount,
        "recipient": sanitize_input(payload.recipient),
        "hash": sanitize_input(payload.hash),
        "status": normalize_label(status, TransactionStatus) if status else TransactionStatus.PENDING.value,
        "details": sanitize_details(payload.details),
    }
    tx = await ledger.create_transaction(record)

    if tx_type == TransactionType.DEPOSIT.value:
        if not await users.increment_balance(user.wallet_address, payload.amount):
            # the ledger row is already committed and stays the source of truth
            logger.error("Deposit id=%s recorded but balance not credited user_id=%s", tx.id, user.id)

    return {"message": "Transaction recorded successfully", "transaction_id": tx.id}


@router.patch("/transactions/{transaction_id}", response_model=TransactionStatusUpdated)
async def update_transaction_status(
    transaction_id: int,
    payload: StatusUpdate,
    ledger: TransactionManager = Depends(get_transaction_manager),
):
    """
    Move a transaction to a new status (e.g. pending -> completed).
    """
    status = sanitize_input(payload.status)
    if not status:
        raise ValidationError("Missing required fields")
    status = normalize_label(status, TransactionStatus)

    if not await ledger.get_transaction(transaction_id):
        raise NotFoundError("Transaction not found")
    if not await ledger.update_transaction_status(transaction_id, status):
        raise StorageError("Failed to update transaction")

    return {
        "message": "Transaction status updated",
        "transaction_id": transaction_id,
        "status": status,
    }
