"""
Wallet bank REST service: users by wallet address, a cached balance,
a transaction ledger and fixed-rate loans.
"""

__version__ = "1.0.0"
