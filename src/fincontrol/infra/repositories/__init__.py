"""Concrete repository implementations using SQLModel."""

from .transaction import SQLModelTransactionRepository
from .user import SQLModelUserRepository

__all__ = [
    "SQLModelTransactionRepository",
    "SQLModelUserRepository",
]
