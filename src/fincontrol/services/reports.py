"""Reporting utilities for FinControl."""

from __future__ import annotations

import io
from typing import Sequence

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt
from matplotlib.backends.backend_pdf import PdfPages
from matplotlib.figure import Figure

from ..models.transaction import TransactionType
from .aggregates import (
    Movement,
    category_breakdown,
    chart_ready,
    format_currency,
    running_balance,
)
from .export_csv import format_date

PDF_FILENAME = "reporte-transacciones.pdf"
REPORT_TITLE = "Reporte de Transacciones"
TABLE_HEADERS = ["Fecha", "Descripción", "Monto", "Tipo", "Categoría", "Cuenta"]
ROWS_PER_PAGE = 30
PIE_COLORS = ["#FF6384", "#36A2EB", "#FFCE56", "#4BC0C0", "#9966FF", "#FF9F40"]


def _table_rows(movements: Sequence[Movement]) -> list[list[str]]:
    return [
        [
            format_date(tx.date),
            getattr(tx, "description", ""),
            format_currency(tx.amount),
            TransactionType(tx.type).value,
            tx.category or "",
            tx.account,
        ]
        for tx in movements
    ]


def build_table_figure(rows: list[list[str]], *, title: str) -> Figure:
    """One A4-portrait page holding a slice of the transactions table."""

    fig, ax = plt.subplots(figsize=(8.27, 11.69))
    ax.axis("off")
    ax.set_title(title, fontsize=14, fontweight="bold", loc="left")
    if rows:
        table = ax.table(cellText=rows, colLabels=TABLE_HEADERS, loc="upper center", cellLoc="left")
        table.auto_set_font_size(False)
        table.set_fontsize(8)
        table.scale(1, 1.3)
    return fig


def build_category_chart(movements: Sequence[Movement]) -> Figure:
    """Pie of expenses and investments per category."""

    breakdown = category_breakdown(movements)
    fig, ax = plt.subplots(figsize=(8.27, 6))
    if breakdown:
        ax.pie(
            [float(value) for value in breakdown.values()],
            labels=list(breakdown.keys()),
            colors=PIE_COLORS,
            autopct=lambda pct: f"{pct:.1f}%" if pct > 4 else "",
            startangle=90,
        )
        ax.axis("equal")
        ax.set_title("Gastos e Inversiones por Categoría", fontsize=14, fontweight="bold")
    else:
        ax.text(0.5, 0.5, "No hay gastos para mostrar.", ha="center", va="center", color="#666")
        ax.axis("off")
    return fig


def build_balance_chart(movements: Sequence[Movement]) -> Figure:
    """Line of the cumulative net balance over time."""

    fig, ax = plt.subplots(figsize=(8.27, 5))
    if not chart_ready(movements):
        ax.text(0.5, 0.5, "Más datos para la línea de tiempo.", ha="center", va="center", color="#666")
        ax.axis("off")
        return fig
    series = running_balance(movements)
    ax.plot(
        [format_date(day) for day in series],
        [float(value) for value in series.values()],
        color="#4a90e2",
        marker="o",
        label="Balance Neto",
    )
    ax.set_title("Balance Neto", fontsize=14, fontweight="bold")
    ax.grid(True, alpha=0.3)
    ax.legend()
    fig.autofmt_xdate()
    return fig


def render_pdf_report(movements: Sequence[Movement]) -> bytes:
    """Render the transactions table and both charts into a PDF document."""

    rows = _table_rows(movements)
    buffer = io.BytesIO()
    with PdfPages(buffer) as pdf:
        chunks = [rows[i:i + ROWS_PER_PAGE] for i in range(0, len(rows), ROWS_PER_PAGE)] or [[]]
        for index, chunk in enumerate(chunks):
            title = REPORT_TITLE if index == 0 else f"{REPORT_TITLE} ({index + 1})"
            fig = build_table_figure(chunk, title=title)
            pdf.savefig(fig)
            plt.close(fig)
        for builder in (build_category_chart, build_balance_chart):
            fig = builder(movements)
            pdf.savefig(fig, bbox_inches="tight")
            plt.close(fig)
    return buffer.getvalue()
