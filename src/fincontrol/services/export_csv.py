"""CSV export helpers for FinControl."""

from __future__ import annotations

import csv
import io
from decimal import Decimal
from typing import Iterable

from ..models.transaction import Transaction, TransactionType

CSV_HEADERS = ["ID", "Fecha", "Descripción", "Monto", "Tipo", "Categoría", "Cuenta"]
CSV_FILENAME = "transacciones.csv"


def format_date(value) -> str:
    """Render a date as DD/MM/YYYY (es-ES)."""

    return value.strftime("%d/%m/%Y")


def _serialize_value(value) -> str:
    if value is None:
        return ""
    if isinstance(value, TransactionType):
        return value.value
    if isinstance(value, Decimal):
        return f"{value:.2f}"
    return str(value)


def transactions_to_csv(transactions: Iterable[Transaction]) -> str:
    """Serialize transactions to CSV text: header row then one row per transaction.

    Fields containing a comma, double quote or newline are quoted with inner
    quotes doubled (``csv.QUOTE_MINIMAL``). Rows end with ``\\n``.
    """

    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_MINIMAL, lineterminator="\n")
    writer.writerow(CSV_HEADERS)
    for tx in transactions:
        writer.writerow(
            [
                _serialize_value(tx.id),
                format_date(tx.date),
                _serialize_value(tx.description),
                _serialize_value(Decimal(tx.amount)),
                _serialize_value(TransactionType(tx.type)),
                _serialize_value(tx.category),
                _serialize_value(tx.account),
            ]
        )
    return buffer.getvalue()
