from typing import AsyncGenerator, Optional

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from walletbank.common.validators import sanitize_input
from walletbank.db import session as db_session
from walletbank.db.loans import LoanManager
from walletbank.db.models import User
from walletbank.db.transactions import TransactionManager
from walletbank.db.users import UserManager
from walletbank.errors import NotFoundError, ValidationError
from walletbank.logging_config import get_logger

logger = get_logger("walletbank.api.deps")


async def get_db() -> AsyncGenerator:
    """
    Async DB session dependency for FastAPI routes, one per request.
    """
    # looked up per call so configure_engine() rebinding takes effect
    async with db_session.AsyncSessionLocal() as session:
        yield session


def get_user_manager(db: AsyncSession = Depends(get_db)) -> UserManager:
    return UserManager(db)


def get_transaction_manager(db: AsyncSession = Depends(get_db)) -> TransactionManager:
    return TransactionManager(db)


def get_loan_manager(db: AsyncSession = Depends(get_db)) -> LoanManager:
    return LoanManager(db)


async def require_user(users: UserManager, wallet_address: Optional[str]) -> User:
    """
    Resolve the user behind a wallet_address parameter.
    Raises ValidationError when the parameter is absent, NotFoundError when no user matches.
    """
    wallet = sanitize_input(wallet_address)
    if not wallet:
        raise ValidationError("Wallet address required")
    user = await users.get_user_by_wallet(wallet)
    if not user:
        logger.warning("User not found wallet=%s", wallet)
        raise NotFoundError("User not found")
    return user
