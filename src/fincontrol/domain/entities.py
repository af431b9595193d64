"""Plain value objects passed between the HTTP layer, services and repositories."""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from ..models.transaction import TransactionType


@dataclass(frozen=True)
class TransactionFields:
    """Replaceable columns of a transaction, already validated."""

    type: TransactionType
    date: dt.date
    description: str
    amount: Decimal
    account: str
    category: Optional[str] = None


@dataclass(frozen=True)
class TokenIdentity:
    """Identity recovered from a verified bearer token."""

    user_id: int
    username: str
