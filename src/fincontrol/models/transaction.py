"""SQLModel definitions for ledger transactions."""

from __future__ import annotations

import datetime as dt
from decimal import Decimal
from enum import Enum
from typing import Any, ClassVar, Optional

from sqlmodel import Field, SQLModel


class TransactionType(str, Enum):
    """Kinds of movement; only income adds to a balance."""

    INCOME = "Ingreso"
    EXPENSE = "Gasto"
    INVESTMENT = "Inversion"

    @property
    def is_income(self) -> bool:
        return self is TransactionType.INCOME


class Transaction(SQLModel, table=True):
    """A single ledger movement owned by one user."""

    __tablename__: ClassVar[str] = "transaction"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="user.id", nullable=False, index=True)
    type: TransactionType = Field(nullable=False)
    date: dt.date = Field(nullable=False, index=True)
    description: str = Field(nullable=False, max_length=255)
    amount: Decimal = Field(nullable=False, max_digits=12, decimal_places=2)
    category: Optional[str] = Field(default=None, max_length=64)
    account: str = Field(nullable=False, max_length=64)

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready representation used by the API."""

        return {
            "id": self.id,
            "user_id": self.user_id,
            "type": TransactionType(self.type).value,
            "date": self.date.isoformat(),
            "description": self.description,
            "amount": float(self.amount),
            "category": self.category,
            "account": self.account,
        }
