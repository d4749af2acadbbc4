# walletbank/db/transactions.py
from typing import Any, Dict, List, Optional

from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from walletbank import config
from walletbank.common.utils import TransactionStatus, utcnow
from walletbank.db.models import Transaction
from walletbank.errors import StorageError
from walletbank.logging_config import get_logger

logger = get_logger("walletbank.db.transactions")


class TransactionManager:
    """
    Append-only ledger of deposits, withdrawals and transfers per user.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create_transaction(self, record: Dict[str, Any]) -> Transaction:
        """
        Append one ledger row.

        `record` keys: user_id, type, amount, recipient, hash, status, details.
        Amount and type are stored as given; nothing is checked against the balance.
        """
        now = utcnow()
        tx = Transaction(
            user_id=record["user_id"],
            transaction_type=record["type"],
            amount=record.get("amount"),
            recipient_address=record.get("recipient"),
            transaction_hash=record.get("hash"),
            status=record.get("status") or TransactionStatus.PENDING.value,
            details=record.get("details"),
            created_at=now,
            updated_at=now,
        )
        try:
            self.db.add(tx)
            await self.db.commit()
            await self.db.refresh(tx)
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.exception("create_transaction failed user_id=%s: %s", record.get("user_id"), e)
            raise StorageError("Failed to record transaction") from e
        logger.info(
            "Recorded transaction id=%s user_id=%s type=%s amount=%s",
            tx.id,
            tx.user_id,
            tx.transaction_type,
            tx.amount,
        )
        return tx

    async def get_user_transactions(self, user_id: int, limit: Optional[int] = None) -> List[Transaction]:
        """
        Newest first, at most `limit` rows (TRANSACTION_HISTORY_LIMIT by default).
        Older rows are not reachable through this call.
        """
        if limit is None:
            limit = config.TRANSACTION_HISTORY_LIMIT
        stmt = (
            select(Transaction)
            .where(Transaction.user_id == user_id)
            .order_by(Transaction.created_at.desc(), Transaction.id.desc())
            .limit(limit)
        )
        res = await self.db.execute(stmt)
        return list(res.scalars().all())

    async def get_transaction(self, transaction_id: int) -> Optional[Transaction]:
        stmt = select(Transaction).where(Transaction.id == transaction_id)
        res = await self.db.execute(stmt)
        return res.scalars().first()

    async def update_transaction_status(self, transaction_id: int, status: str) -> bool:
        stmt = (
            update(Transaction)
            .where(Transaction.id == transaction_id)
            .values(status=status, updated_at=utcnow())
        )
        try:
            res = await self.db.execute(stmt)
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.exception("update_transaction_status failed id=%s: %s", transaction_id, e)
            return False
        logger.info("Transaction id=%s status -> %s (rows=%s)", transaction_id, status, res.rowcount)
        return bool(res.rowcount)
