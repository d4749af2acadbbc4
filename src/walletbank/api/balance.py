from typing import Optional

from fastapi import APIRouter, Depends

from walletbank.common.utils import to_float, to_iso
from walletbank.db.users import UserManager
from walletbank.logging_config import get_logger
from .deps import get_user_manager, require_user
from .schemas import BalanceOut

logger = get_logger("walletbank.api.balance")

router = APIRouter(tags=["balance"])


@router.get("/balance", response_model=BalanceOut)
async def get_balance(
    wallet_address: Optional[str] = None,
    users: UserManager = Depends(get_user_manager),
):
    """
    Cached bank balance for a wallet.
    """
    user = await require_user(users, wallet_address)
    logger.info("Balance lookup user_id=%s balance=%s", user.id, user.bank_balance)
    return {
        "bank_balance": to_float(user.bank_balance) or 0.0,
        "last_updated": to_iso(user.updated_at),
    }
