# walletbank/db/users.py
from decimal import Decimal
from typing import Optional

from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from walletbank.common.utils import utcnow
from walletbank.db.models import User
from walletbank.errors import StorageError
from walletbank.logging_config import get_logger

logger = get_logger("walletbank.db.users")


class UserManager:
    """
    User registry keyed by wallet address.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create_user(self, wallet_address: str, email: Optional[str] = None) -> User:
        """
        Insert a new user with a zero balance.

        Callers check get_user_by_wallet first; uniqueness is left to the
        table constraint.
        """
        now = utcnow()
        user = User(
            wallet_address=wallet_address,
            email=email,
            bank_balance=Decimal("0.00"),
            created_at=now,
            updated_at=now,
        )
        try:
            self.db.add(user)
            await self.db.commit()
            await self.db.refresh(user)
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.exception("create_user failed wallet=%s: %s", wallet_address, e)
            raise StorageError("Failed to create user") from e
        logger.info("Created user id=%s wallet=%s", user.id, wallet_address)
        return user

    async def get_user_by_wallet(self, wallet_address: str) -> Optional[User]:
        # populate_existing: the cached balance may have moved under this session
        stmt = (
            select(User)
            .where(User.wallet_address == wallet_address)
            .execution_options(populate_existing=True)
        )
        res = await self.db.execute(stmt)
        return res.scalars().first()

    async def update_balance(self, wallet_address: str, new_balance: Decimal) -> bool:
        """
        Overwrite the cached balance. Last writer wins.
        """
        stmt = (
            update(User)
            .where(User.wallet_address == wallet_address)
            .values(bank_balance=new_balance, updated_at=utcnow())
        )
        return await self._apply(stmt, "update_balance", wallet_address)

    async def increment_balance(self, wallet_address: str, amount: Decimal) -> bool:
        """
        Add `amount` to the cached balance in a single UPDATE statement.
        """
        stmt = (
            update(User)
            .where(User.wallet_address == wallet_address)
            .values(bank_balance=User.bank_balance + amount, updated_at=utcnow())
        )
        return await self._apply(stmt, "increment_balance", wallet_address)

    async def _apply(self, stmt, op: str, wallet_address: str) -> bool:
        try:
            res = await self.db.execute(stmt)
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.exception("%s failed wallet=%s: %s", op, wallet_address, e)
            return False
        if not res.rowcount:
            logger.warning("%s matched no user wallet=%s", op, wallet_address)
            return False
        logger.info("%s ok wallet=%s", op, wallet_address)
        return True
