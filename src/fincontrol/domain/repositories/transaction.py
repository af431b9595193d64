"""Transaction repository protocol."""

from __future__ import annotations

from typing import Protocol

from ...models.transaction import Transaction
from ..entities import TransactionFields


class TransactionRepository(Protocol):
    """Owner-scoped persistence for transactions."""

    def create(self, owner_id: int, fields: TransactionFields) -> Transaction:
        """Persist a new transaction for ``owner_id``."""
        ...

    def list_by_owner(self, owner_id: int) -> list[Transaction]:
        """Return the owner's transactions, newest date first."""
        ...

    def update(self, owner_id: int, transaction_id: int, fields: TransactionFields) -> Transaction:
        """Overwrite a transaction; raises NotFoundError when it is absent or not owned."""
        ...

    def delete(self, owner_id: int, transaction_id: int) -> None:
        """Remove a transaction; raises NotFoundError when it is absent or not owned."""
        ...
