"""Tests for CSV serialization and the CSV export endpoint."""

from __future__ import annotations

import csv
import io
from datetime import date
from decimal import Decimal

from fincontrol.models.transaction import Transaction, TransactionType
from fincontrol.services.export_csv import CSV_HEADERS, transactions_to_csv


def _tx(**overrides) -> Transaction:
    values = {
        "id": 1,
        "user_id": 1,
        "type": TransactionType.EXPENSE,
        "date": date(2024, 1, 5),
        "description": "Groceries",
        "amount": Decimal("50.25"),
        "category": "Food",
        "account": "Checking",
    }
    values.update(overrides)
    return Transaction(**values)


def test_header_and_one_line_per_transaction():
    body = transactions_to_csv([_tx(id=1), _tx(id=2, type=TransactionType.INCOME, amount=Decimal("125"))])

    lines = body.splitlines()
    assert len(lines) == 3
    assert lines[0] == "ID,Fecha,Descripción,Monto,Tipo,Categoría,Cuenta"
    assert lines[1] == "1,05/01/2024,Groceries,50.25,Gasto,Food,Checking"
    assert lines[2] == "2,05/01/2024,Groceries,125.00,Ingreso,Food,Checking"


def test_fields_with_commas_quotes_and_newlines_are_quoted():
    body = transactions_to_csv(
        [
            _tx(description="Rent, March"),
            _tx(description='The "big" shop'),
            _tx(description="line one\nline two"),
        ]
    )

    assert '"Rent, March"' in body
    assert '"The ""big"" shop"' in body
    rows = list(csv.reader(io.StringIO(body)))
    assert rows[0] == CSV_HEADERS
    assert [row[2] for row in rows[1:]] == ["Rent, March", 'The "big" shop', "line one\nline two"]


def test_missing_category_is_an_empty_field():
    body = transactions_to_csv([_tx(category=None)])

    assert body.splitlines()[1].split(",")[5] == ""


def test_endpoint_returns_attachment(client, auth_headers, transaction_payload):
    headers = auth_headers()
    for description in ("Salary", "Dinner, friends"):
        client.post("/api/transactions", json=transaction_payload(description=description), headers=headers)

    response = client.get("/api/transactions/export/csv", headers=headers)

    assert response.status_code == 200
    assert response.mimetype == "text/csv"
    assert response.headers["Content-Disposition"] == 'attachment; filename="transacciones.csv"'
    body = response.get_data(as_text=True)
    assert len(body.splitlines()) == 3
    assert '"Dinner, friends"' in body


def test_endpoint_with_no_transactions_is_404(client, auth_headers):
    response = client.get("/api/transactions/export/csv", headers=auth_headers())

    assert response.status_code == 404
    assert response.get_json()["message"] == "No hay transacciones para exportar."
