from decimal import Decimal
from typing import Any, List, Optional

from pydantic import BaseModel, Field

# largest value a DECIMAL(18, 2) column holds
MAX_AMOUNT = Decimal("9999999999999999.99")
MAX_TERM_DAYS = 36500


class UserOut(BaseModel):
    id: int
    wallet_address: str
    email: Optional[str] = None
    bank_balance: float
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class TransactionOut(BaseModel):
    id: int
    user_id: int
    transaction_type: str
    amount: Optional[float] = None
    recipient_address: Optional[str] = None
    transaction_hash: Optional[str] = None
    status: str
    details: Optional[Any] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class LoanOut(BaseModel):
    id: int
    user_id: int
    loan_amount: float
    interest_rate: float
    loan_term_days: int
    total_repayment: float
    status: str
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
    due_date: Optional[str] = None


class OverdueLoanOut(LoanOut):
    wallet_address: str


class AuthRequest(BaseModel):
    # Optional so a missing address is reported as an invalid one (400)
    wallet_address: Optional[str] = Field(None, examples=["0x" + "ab" * 20])
    email: Optional[str] = None


class AuthResult(BaseModel):
    message: str
    user: UserOut
    token: str


class BalanceOut(BaseModel):
    bank_balance: float
    last_updated: Optional[str] = None


class TransactionCreate(BaseModel):
    wallet_address: str
    type: str = Field(..., examples=["deposit"])
    amount: Decimal = Field(..., ge=-MAX_AMOUNT, le=MAX_AMOUNT, examples=[50])
    recipient: Optional[str] = None
    hash: Optional[str] = None
    status: Optional[str] = None
    details: Optional[Any] = None


class TransactionList(BaseModel):
    transactions: List[TransactionOut]


class TransactionRecorded(BaseModel):
    message: str
    transaction_id: int


class LoanCreate(BaseModel):
    wallet_address: str
    amount: Decimal = Field(..., ge=-MAX_AMOUNT, le=MAX_AMOUNT, examples=[1000])
    term: int = Field(..., ge=0, le=MAX_TERM_DAYS, examples=[30, 90, 180])


class LoanList(BaseModel):
    loans: List[LoanOut]


class OverdueLoanList(BaseModel):
    loans: List[OverdueLoanOut]


class LoanApproved(BaseModel):
    message: str
    loan_id: int
    amount: float
    total_repayment: float
    due_days: int


class StatusUpdate(BaseModel):
    status: str = Field(..., min_length=1, examples=["active"])


class TransactionStatusUpdated(BaseModel):
    message: str
    transaction_id: int
    status: str


class LoanStatusUpdated(BaseModel):
    message: str
    loan_id: int
    status: str
