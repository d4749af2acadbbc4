# walletbank/db/models.py
from sqlalchemy import Column, DECIMAL, JSON, TIMESTAMP, ForeignKey, Integer, String

from walletbank.db.session import Base


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    wallet_address = Column(String(42), unique=True, nullable=False, index=True)
    email = Column(String(255), nullable=True)
    # Denormalized cache; mutated by deposits and loans, never derived from the ledger
    bank_balance = Column(DECIMAL(18, 2), nullable=False, default=0)
    created_at = Column(TIMESTAMP)
    updated_at = Column(TIMESTAMP)


class Transaction(Base):
    __tablename__ = "transactions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    transaction_type = Column(String(30), nullable=False)
    amount = Column(DECIMAL(18, 2))
    recipient_address = Column(String(255), nullable=True)
    transaction_hash = Column(String(255), nullable=True)
    status = Column(String(20), nullable=False, default="pending")
    details = Column(JSON, nullable=True)
    created_at = Column(TIMESTAMP)
    updated_at = Column(TIMESTAMP)


class Loan(Base):
    __tablename__ = "loans"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    loan_amount = Column(DECIMAL(18, 2), nullable=False)
    interest_rate = Column(DECIMAL(5, 2), nullable=False)
    loan_term_days = Column(Integer, nullable=False)
    # Computed once at origination
    total_repayment = Column(DECIMAL(18, 2), nullable=False)
    status = Column(String(20), nullable=False, default="approved")
    created_at = Column(TIMESTAMP)
    updated_at = Column(TIMESTAMP)
    due_date = Column(TIMESTAMP)
