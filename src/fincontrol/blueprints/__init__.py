"""Blueprint exports."""

from . import auth, transactions

__all__ = [
    "auth",
    "transactions",
]
