"""Owner-scoped transaction endpoints."""

from __future__ import annotations

from flask import Response, jsonify, request

from ...errors import NotFoundError
from ...extensions import get_services
from ...logging_config import get_logger
from ...security import current_identity, token_required
from ...services.export_csv import CSV_FILENAME, transactions_to_csv
from ...services.reports import PDF_FILENAME, render_pdf_report
from . import bp
from .forms import TransactionForm

logger = get_logger("transactions")

NOTHING_TO_EXPORT = "No hay transacciones para exportar."


def _attachment(body: str | bytes, *, mimetype: str, filename: str) -> Response:
    response = Response(body, mimetype=mimetype)
    response.headers["Content-Disposition"] = f'attachment; filename="{filename}"'
    return response


def _owned_transactions_or_404():
    identity = current_identity()
    rows = get_services().transactions.list_by_owner(identity.user_id)
    if not rows:
        raise NotFoundError(NOTHING_TO_EXPORT)
    return identity, rows


@bp.get("")
@token_required
def list_transactions():
    rows = get_services().transactions.list_by_owner(current_identity().user_id)
    return jsonify([tx.to_dict() for tx in rows])


@bp.post("")
@token_required
def create_transaction():
    fields = TransactionForm.from_mapping(request.get_json(silent=True)).cleaned_or_raise()
    tx = get_services().transactions.create(current_identity().user_id, fields)
    return jsonify(tx.to_dict()), 201


@bp.put("/<int:transaction_id>")
@token_required
def update_transaction(transaction_id: int):
    fields = TransactionForm.from_mapping(request.get_json(silent=True)).cleaned_or_raise()
    tx = get_services().transactions.update(current_identity().user_id, transaction_id, fields)
    return jsonify(tx.to_dict())


@bp.delete("/<int:transaction_id>")
@token_required
def delete_transaction(transaction_id: int):
    get_services().transactions.delete(current_identity().user_id, transaction_id)
    return jsonify({"message": "Transacción eliminada correctamente."})


@bp.get("/export/csv")
@token_required
def export_csv():
    identity, rows = _owned_transactions_or_404()
    body = transactions_to_csv(rows)
    logger.info("CSV export", extra={"user_id": identity.user_id, "rows": len(rows)})
    return _attachment(body, mimetype="text/csv", filename=CSV_FILENAME)


@bp.get("/export/pdf")
@token_required
def export_pdf():
    identity, rows = _owned_transactions_or_404()
    body = render_pdf_report(rows)
    logger.info("PDF export", extra={"user_id": identity.user_id, "rows": len(rows)})
    return _attachment(body, mimetype="application/pdf", filename=PDF_FILENAME)
