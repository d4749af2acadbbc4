from typing import Optional

from fastapi import APIRouter, Depends

from walletbank.common.utils import LoanStatus, normalize_label
from walletbank.common.validators import sanitize_input
from walletbank.db.loans import LoanManager
from walletbank.db.users import UserManager
from walletbank.errors import NotFoundError, StorageError, ValidationError
from walletbank.logging_config import get_logger
from .deps import get_loan_manager, get_user_manager, require_user
from .schemas import LoanApproved, LoanCreate, LoanList, LoanStatusUpdated, OverdueLoanList, StatusUpdate
from .serializers import serialize_loan

logger = get_logger("walletbank.api.loans")

router = APIRouter(tags=["loans"])


@router.get("/loans", response_model=LoanList)
async def list_loans(
    wallet_address: Optional[str] = None,
    users: UserManager = Depends(get_user_manager),
    loans: LoanManager = Depends(get_loan_manager),
):
    """
    All loans for a wallet, newest first.
    """
    user = await require_user(users, wallet_address)
    logger.info("Fetching loans user_id=%s", user.id)
    rows = await loans.get_user_loans(user.id)
    return {"loans": [serialize_loan(l) for l in rows]}


@router.get("/loans/overdue", response_model=OverdueLoanList)
async def list_overdue_loans(loans: LoanManager = Depends(get_loan_manager)):
    """
    Active loans past their due date, across all users.
    """
    rows = await loans.get_overdue_loans()
    logger.info("Overdue loans: %s", len(rows))
    return {"loans": [{**serialize_loan(l), "wallet_address": wallet} for l, wallet in rows]}


@router.post("/loans", response_model=LoanApproved)
async def originate_loan(
    payload: LoanCreate,
    users: UserManager = Depends(get_user_manager),
    loans: LoanManager = Depends(get_loan_manager),
):
    """
    Approve a loan at the term's fixed rate and credit the principal to the
    cached balance.
    """
    user = await require_user(users, payload.wallet_address)

    logger.info(
        "Loan request user_id=%s amount=%s term=%s",
        user.id,
        payload.amount,
        payload.term,
    )
    # StorageError("Failed to process loan") propagates as a 500
    loan = await loans.create_loan(user.id, payload.amount, payload.term)

    if not await users.increment_balance(user.wallet_address, payload.amount):
        logger.error("Loan id=%s approved but principal not credited user_id=%s", loan.id, user.id)

    return {
        "message": "Loan approved successfully",
        "loan_id": loan.id,
        "amount": float(payload.amount),
        "total_repayment": float(loan.total_repayment),
        "due_days": payload.term,
    }


@router.patch("/loans/{loan_id}", response_model=LoanStatusUpdated)
async def update_loan_status(
    loan_id: int,
    payload: StatusUpdate,
    loans: LoanManager = Depends(get_loan_manager),
):
    """
    Caller-driven lifecycle step (approved -> active -> repaid / defaulted).
    No transition rules are enforced.
    """
    status = sanitize_input(payload.status)
    if not status:
        raise ValidationError("Missing required fields")
    status = normalize_label(status, LoanStatus)

    if not await loans.get_loan(loan_id):
        raise NotFoundError("Loan not found")
    if not await loans.update_loan_status(loan_id, status):
        raise StorageError("Failed to update loan")

    return {"message": "Loan status updated", "loan_id": loan_id, "status": status}
