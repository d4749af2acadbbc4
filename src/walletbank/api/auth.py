from typing import Optional

from fastapi import APIRouter, Depends

from walletbank.common.utils import generate_token
from walletbank.common.validators import sanitize_input, validate_wallet_address
from walletbank.db.users import UserManager
from walletbank.errors import ValidationError
from walletbank.logging_config import get_logger
from .deps import get_user_manager
from .schemas import AuthRequest, AuthResult
from .serializers import serialize_user

logger = get_logger("walletbank.api.auth")

router = APIRouter(tags=["auth"])


@router.post("/auth", response_model=AuthResult)
async def authenticate(
    payload: Optional[AuthRequest] = None,
    users: UserManager = Depends(get_user_manager),
):
    """
    Sign in by wallet address, registering the wallet on first use.

    The returned token is freshly generated on every call and is not stored
    or checked anywhere.
    """
    raw_wallet = payload.wallet_address if payload else None
    if not validate_wallet_address(raw_wallet):
        logger.warning("Auth rejected - invalid wallet address %r", raw_wallet)
        raise ValidationError("Invalid wallet address")

    wallet = sanitize_input(raw_wallet)
    email = sanitize_input(payload.email) or None

    user = await users.get_user_by_wallet(wallet)
    if user:
        logger.info("Auth ok user_id=%s wallet=%s", user.id, wallet)
        message = "User authenticated"
    else:
        logger.info("Registering new wallet=%s", wallet)
        # StorageError("Failed to create user") propagates as a 500
        await users.create_user(wallet, email)
        user = await users.get_user_by_wallet(wallet)
        message = "User created successfully"

    return {
        "message": message,
        "user": serialize_user(user),
        "token": generate_token(),
    }
