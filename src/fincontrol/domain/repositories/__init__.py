"""Repository protocol definitions for domain layer."""

from .transaction import TransactionRepository
from .user import UserRepository

__all__ = [
    "TransactionRepository",
    "UserRepository",
]
