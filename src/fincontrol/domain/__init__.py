"""Domain value objects and repository protocols."""

from .entities import TokenIdentity, TransactionFields

__all__ = ["TokenIdentity", "TransactionFields"]
