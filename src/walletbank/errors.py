"""
Application-level exceptions.

Each carries the HTTP status the API layer answers with; the message is sent
back verbatim as {"error": message}.
"""


class WalletBankError(Exception):
    status_code = 500

    def __init__(self, message: str = "Internal server error"):
        super().__init__(message)
        self.message = message


class ValidationError(WalletBankError):
    """Malformed or missing input."""

    status_code = 400


class NotFoundError(WalletBankError):
    """No matching user (or loan / transaction) for the request."""

    status_code = 404


class StorageError(WalletBankError):
    """Insert or update failed at the store; the underlying cause is logged, not exposed."""

    status_code = 500
