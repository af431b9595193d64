"""In-memory ledger held by the client and the figures derived from it."""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Iterable, Optional

from ..models.transaction import TransactionType
from ..services import aggregates


@dataclass(frozen=True)
class LedgerEntry:
    """Client-side copy of a transaction returned by the API."""

    id: int
    type: TransactionType
    date: dt.date
    description: str
    amount: Decimal
    account: str
    category: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> LedgerEntry:
        return cls(
            id=int(data["id"]),
            type=TransactionType(data["type"]),
            date=dt.date.fromisoformat(str(data["date"])[:10]),
            description=data.get("description") or "",
            amount=Decimal(str(data["amount"])),
            account=data.get("account") or "",
            category=data.get("category") or None,
        )

    def to_payload(self) -> dict[str, Any]:
        return {
            "type": self.type.value,
            "date": self.date.isoformat(),
            "description": self.description,
            "amount": float(self.amount),
            "category": self.category,
            "account": self.account,
        }


@dataclass(frozen=True)
class LedgerSnapshot:
    """Everything the UI renders after a load or mutation."""

    entries: tuple[LedgerEntry, ...]
    totals: aggregates.Totals
    balances: dict[str, Decimal]
    months: list[aggregates.MonthSummary]
    categories: dict[str, Decimal]
    balance_series: dict[dt.date, Decimal]
    alert: Optional[str] = None

    @property
    def is_empty(self) -> bool:
        return not self.entries


@dataclass
class LedgerState:
    """Owned, disposable copy of the current user's transactions."""

    entries: list[LedgerEntry] = field(default_factory=list)

    def load(self, rows: Iterable[dict[str, Any] | LedgerEntry]) -> None:
        """Replace the whole list, e.g. after GET /api/transactions."""

        self.entries = [
            row if isinstance(row, LedgerEntry) else LedgerEntry.from_dict(row) for row in rows
        ]

    def find(self, entry_id: int) -> Optional[LedgerEntry]:
        return next((entry for entry in self.entries if entry.id == entry_id), None)

    def prepend(self, entry: LedgerEntry) -> None:
        self.entries.insert(0, entry)

    def replace(self, entry: LedgerEntry) -> bool:
        """Swap the entry with the same id; False when it is not held."""

        for index, current in enumerate(self.entries):
            if current.id == entry.id:
                self.entries[index] = entry
                return True
        return False

    def remove(self, entry_id: int) -> None:
        self.entries = [entry for entry in self.entries if entry.id != entry_id]

    def snapshot(self, threshold: object = None) -> LedgerSnapshot:
        totals = aggregates.compute_totals(self.entries)
        return LedgerSnapshot(
            entries=tuple(self.entries),
            totals=totals,
            balances=aggregates.account_balances(self.entries),
            months=aggregates.monthly_summary(self.entries),
            categories=aggregates.category_breakdown(self.entries),
            balance_series=aggregates.running_balance(self.entries),
            alert=aggregates.low_balance_alert(totals.net, threshold),
        )
