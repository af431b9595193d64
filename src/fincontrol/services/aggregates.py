"""Derived figures for a list of ledger movements.

Everything here is a pure function over objects exposing ``type``, ``date``,
``amount``, ``category`` and ``account`` attributes, so the same code serves
the server-side PDF report and the client's in-memory ledger.
"""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Iterable, Optional, Protocol, Sequence

from ..models.transaction import TransactionType

UNCATEGORIZED = "Sin Categoría"
_ZERO = Decimal("0")

_MONTH_NAMES = (
    "enero", "febrero", "marzo", "abril", "mayo", "junio",
    "julio", "agosto", "septiembre", "octubre", "noviembre", "diciembre",
)


class Movement(Protocol):
    type: TransactionType
    date: dt.date
    amount: Decimal
    category: Optional[str]
    account: str


@dataclass(frozen=True)
class Totals:
    income: Decimal
    expense: Decimal
    net: Decimal


@dataclass(frozen=True)
class MonthSummary:
    """Income against outflow for one calendar month."""

    month: str  # YYYY-MM
    income: Decimal
    expense: Decimal

    @property
    def balance(self) -> Decimal:
        return self.income - self.expense

    @property
    def total_flow(self) -> Decimal:
        return self.income + self.expense

    @property
    def income_percent(self) -> float:
        if self.total_flow <= 0:
            return 0.0
        return float(self.income / self.total_flow * 100)

    @property
    def expense_percent(self) -> float:
        if self.total_flow <= 0:
            return 0.0
        return float(self.expense / self.total_flow * 100)

    @property
    def label(self) -> str:
        return month_label(self.month)


def _is_income(movement: Movement) -> bool:
    return TransactionType(movement.type).is_income


def signed_amount(movement: Movement) -> Decimal:
    """Income adds to a balance, every other type subtracts."""

    amount = Decimal(movement.amount)
    return amount if _is_income(movement) else -amount


def format_currency(amount: Decimal | float | int) -> str:
    return f"${Decimal(amount):.2f}"


def month_label(key: str) -> str:
    """Render ``YYYY-MM`` as e.g. ``enero de 2024``."""

    year, month = key.split("-")
    return f"{_MONTH_NAMES[int(month) - 1]} de {year}"


def compute_totals(movements: Iterable[Movement]) -> Totals:
    income = _ZERO
    expense = _ZERO
    for movement in movements:
        if _is_income(movement):
            income += Decimal(movement.amount)
        else:
            expense += Decimal(movement.amount)
    return Totals(income=income, expense=expense, net=income - expense)


def account_balances(movements: Iterable[Movement]) -> dict[str, Decimal]:
    """Running balance per account, in first-seen order."""

    balances: dict[str, Decimal] = {}
    for movement in movements:
        balances[movement.account] = balances.get(movement.account, _ZERO) + signed_amount(movement)
    return balances


def monthly_summary(movements: Iterable[Movement]) -> list[MonthSummary]:
    """Per-month income and outflow, newest month first."""

    buckets: dict[str, list[Decimal]] = {}
    for movement in movements:
        key = movement.date.strftime("%Y-%m")
        bucket = buckets.setdefault(key, [_ZERO, _ZERO])
        if _is_income(movement):
            bucket[0] += Decimal(movement.amount)
        else:
            bucket[1] += Decimal(movement.amount)
    return [
        MonthSummary(month=key, income=income, expense=expense)
        for key, (income, expense) in sorted(buckets.items(), reverse=True)
    ]


def category_breakdown(movements: Iterable[Movement]) -> dict[str, Decimal]:
    """Outflow (expenses and investments) grouped by category."""

    totals: dict[str, Decimal] = {}
    for movement in movements:
        if _is_income(movement):
            continue
        key = movement.category or UNCATEGORIZED
        totals[key] = totals.get(key, _ZERO) + Decimal(movement.amount)
    return totals


def running_balance(movements: Iterable[Movement]) -> dict[dt.date, Decimal]:
    """Cumulative balance keyed by date, ascending; the last value of each day wins."""

    balance = _ZERO
    series: dict[dt.date, Decimal] = {}
    for movement in sorted(movements, key=lambda m: m.date):
        balance += signed_amount(movement)
        series[movement.date] = balance
    return series


def parse_threshold(raw: object) -> Optional[Decimal]:
    """Return the threshold as a Decimal, or None when it is empty or unparsable."""

    if raw is None or isinstance(raw, bool):
        return None
    text = str(raw).strip()
    if not text:
        return None
    try:
        value = Decimal(text)
    except InvalidOperation:
        return None
    return value if value.is_finite() else None


def low_balance_alert(net: Decimal, threshold: object) -> Optional[str]:
    """Warning text when ``net`` is below a valid threshold."""

    limit = parse_threshold(threshold)
    if limit is None or net >= limit:
        return None
    return f"Alerta: Tu balance neto ({format_currency(net)}) es menor que el umbral."


def chart_ready(movements: Sequence[Movement]) -> bool:
    """The balance line needs at least two points to be worth drawing."""

    return len(movements) >= 2
