# walletbank/db/loans.py
from datetime import timedelta
from decimal import Decimal, InvalidOperation
from typing import Dict, List, Optional, Tuple

from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from walletbank.common.utils import LoanStatus, utcnow
from walletbank.db.models import Loan, User
from walletbank.errors import StorageError, ValidationError
from walletbank.logging_config import get_logger

logger = get_logger("walletbank.db.loans")

# term in days -> interest rate in percent
INTEREST_RATES: Dict[int, Decimal] = {
    30: Decimal("5"),
    90: Decimal("8"),
    180: Decimal("12"),
}
DEFAULT_INTEREST_RATE = Decimal("10")

CENT = Decimal("0.01")


def interest_rate_for_term(term_days: int) -> Decimal:
    return INTEREST_RATES.get(term_days, DEFAULT_INTEREST_RATE)


def total_repayment(principal: Decimal, rate: Decimal) -> Decimal:
    """
    principal * (1 + rate/100), rounded to cents.
    """
    principal = Decimal(principal)
    return (principal * (1 + Decimal(rate) / 100)).quantize(CENT)


class LoanManager:
    """
    Originates fixed-rate loans and answers loan queries.

    Status transitions after origination are entirely caller-driven.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create_loan(self, user_id: int, principal: Decimal, term_days: int) -> Loan:
        rate = interest_rate_for_term(term_days)
        now = utcnow()
        try:
            total = total_repayment(principal, rate)
            due_date = now + timedelta(days=term_days)
        except (InvalidOperation, OverflowError) as e:
            logger.warning("Loan terms out of range principal=%s term=%s: %s", principal, term_days, e)
            raise ValidationError("Invalid loan amount or term") from e
        loan = Loan(
            user_id=user_id,
            loan_amount=Decimal(principal),
            interest_rate=rate,
            loan_term_days=term_days,
            total_repayment=total,
            status=LoanStatus.APPROVED.value,
            created_at=now,
            updated_at=now,
            due_date=due_date,
        )
        try:
            self.db.add(loan)
            await self.db.commit()
            await self.db.refresh(loan)
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.exception("create_loan failed user_id=%s: %s", user_id, e)
            raise StorageError("Failed to process loan") from e
        logger.info(
            "Loan id=%s approved user_id=%s principal=%s rate=%s term=%s total=%s",
            loan.id,
            user_id,
            loan.loan_amount,
            rate,
            term_days,
            loan.total_repayment,
        )
        return loan

    async def get_user_loans(self, user_id: int) -> List[Loan]:
        stmt = (
            select(Loan)
            .where(Loan.user_id == user_id)
            .order_by(Loan.created_at.desc(), Loan.id.desc())
        )
        res = await self.db.execute(stmt)
        return list(res.scalars().all())

    async def get_loan(self, loan_id: int) -> Optional[Loan]:
        stmt = select(Loan).where(Loan.id == loan_id)
        res = await self.db.execute(stmt)
        return res.scalars().first()

    async def update_loan_status(self, loan_id: int, status: str) -> bool:
        stmt = update(Loan).where(Loan.id == loan_id).values(status=status, updated_at=utcnow())
        try:
            res = await self.db.execute(stmt)
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.exception("update_loan_status failed id=%s: %s", loan_id, e)
            return False
        logger.info("Loan id=%s status -> %s (rows=%s)", loan_id, status, res.rowcount)
        return bool(res.rowcount)

    async def get_overdue_loans(self) -> List[Tuple[Loan, str]]:
        """
        Loans past their due date whose status is "active", with the owner's wallet.

        Loans are originated as "approved", so only loans moved to "active"
        through update_loan_status can show up here.
        """
        stmt = (
            select(Loan, User.wallet_address)
            .join(User, Loan.user_id == User.id)
            .where(Loan.due_date < utcnow(), Loan.status == LoanStatus.ACTIVE.value)
            .order_by(Loan.due_date.asc())
        )
        res = await self.db.execute(stmt)
        return [(loan, wallet) for loan, wallet in res.all()]
