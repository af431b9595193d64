"""Click commands: Flask maintenance commands and the ``fincontrol`` client CLI."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

import click

from .client.api import ApiClient, ApiError
from .client.forms import TransactionFormController
from .client.session import TokenStore
from .client.state import LedgerState
from .config import ClientConfig
from .models.transaction import TransactionType
from .services.aggregates import format_currency, month_label

_LEVEL_COLORS = {"warning": "yellow", "danger": "red", "success": "green"}


def init_app(app) -> None:
    """Register maintenance commands on the Flask app."""

    @app.cli.command("fincontrol-init-db")
    def fincontrol_init_db() -> None:
        """Create the users and transactions tables."""

        from .extensions import get_services
        from .infra.database import init_database

        init_database(get_services().engine)
        click.echo("Database ready.")


def notify(message: str, level: str = "warning") -> None:
    """Non-blocking notification printed to stderr."""

    click.secho(message, fg=_LEVEL_COLORS.get(level), err=True)


@dataclass
class ClientContext:
    config: ClientConfig
    tokens: TokenStore
    session: Any = None

    def api(self, *, authenticated: bool = True) -> ApiClient:
        token = self.tokens.load() if authenticated else None
        if authenticated and token is None:
            notify("No has iniciado sesión. Ejecuta `fincontrol login`.", "danger")
            raise click.exceptions.Exit(1)
        return ApiClient(
            self.config.API_URL, token=token, session=self.session, timeout=self.config.TIMEOUT
        )

    def load_state(self, api: ApiClient) -> LedgerState:
        state = LedgerState()
        state.load(self.call(api.list_transactions))
        return state

    def call(self, func, *args, fallback: str = "La petición al servidor falló."):
        """Run an API call, turning failures into a notification and exit status 1."""

        try:
            return func(*args)
        except ApiError as exc:
            if exc.status in (401, 403):
                self.tokens.clear()
                notify("Sesión expirada; vuelve a iniciar sesión.", "danger")
            else:
                notify(f"{fallback} ({exc.message})", "danger")
            raise click.exceptions.Exit(1) from exc


@click.group()
@click.pass_context
def main(ctx: click.Context) -> None:
    """FinControl personal-finance ledger."""

    obj = ctx.obj if isinstance(ctx.obj, dict) else {}
    config = obj.get("config") or ClientConfig()
    ctx.obj = ClientContext(
        config=config,
        tokens=TokenStore(config.CLIENT_DIR),
        session=obj.get("session"),
    )


@main.command()
@click.option("--env", "env_name", default="development", show_default=True)
@click.option("--host", default=None)
@click.option("--port", type=int, default=None)
def serve(env_name: str, host: Optional[str], port: Optional[int]) -> None:
    """Run the API server."""

    from . import create_app

    app = create_app(env_name)
    config = app.config["FINCONTROL_CONFIG"]
    app.run(host=host or config.HOST, port=port or config.PORT, debug=bool(app.config.get("DEBUG")))


@main.command()
@click.argument("username")
@click.password_option()
@click.pass_obj
def register(obj: ClientContext, username: str, password: str) -> None:
    """Create an account."""

    api = obj.api(authenticated=False)
    obj.call(api.register, username, password, fallback="Error en el registro")
    click.secho("Usuario registrado exitosamente.", fg="green")


@main.command()
@click.argument("username")
@click.option("--password", prompt=True, hide_input=True)
@click.pass_obj
def login(obj: ClientContext, username: str, password: str) -> None:
    """Log in and keep the token for later commands."""

    api = obj.api(authenticated=False)
    try:
        token = api.login(username, password)
    except ApiError as exc:
        notify(exc.message or "Usuario o contraseña incorrectos", "danger")
        raise click.exceptions.Exit(1) from exc
    obj.tokens.save(token)
    click.secho(f"Sesión iniciada como {username}.", fg="green")


@main.command()
@click.pass_obj
def logout(obj: ClientContext) -> None:
    """Forget the stored token."""

    obj.tokens.clear()
    click.echo("Sesión cerrada.")


@main.command("list")
@click.pass_obj
def list_command(obj: ClientContext) -> None:
    """Show all transactions, newest first."""

    state = obj.load_state(obj.api())
    if not state.entries:
        click.echo("No hay movimientos registrados.")
        return
    for entry in state.entries:
        click.echo(
            f"{entry.id:>5}  {entry.date.strftime('%d/%m/%Y')}  {entry.type.value:<9}  "
            f"{format_currency(entry.amount):>12}  {entry.account:<12}  "
            f"{entry.category or '-':<12}  {entry.description}"
        )


_TYPE_CHOICE = click.Choice([t.value for t in TransactionType])


@main.command()
@click.option("--type", "tx_type", type=_TYPE_CHOICE, required=True)
@click.option("--date", "tx_date", required=True, help="YYYY-MM-DD")
@click.option("--description", required=True)
@click.option("--amount", required=True)
@click.option("--account", required=True)
@click.option("--category", default="")
@click.pass_obj
def add(obj: ClientContext, tx_type, tx_date, description, amount, account, category) -> None:
    """Record a new transaction."""

    controller = TransactionFormController(obj.api(), LedgerState(), notify=notify)
    entry = controller.submit(
        {
            "type": tx_type,
            "date": tx_date,
            "description": description,
            "amount": amount,
            "category": category,
            "account": account,
        }
    )
    if entry is None:
        raise click.exceptions.Exit(1)
    click.secho(f"Movimiento #{entry.id} registrado.", fg="green")


@main.command()
@click.argument("transaction_id", type=int)
@click.option("--type", "tx_type", type=_TYPE_CHOICE, default=None)
@click.option("--date", "tx_date", default=None)
@click.option("--description", default=None)
@click.option("--amount", default=None)
@click.option("--account", default=None)
@click.option("--category", default=None)
@click.pass_obj
def edit(obj: ClientContext, transaction_id: int, **changes) -> None:
    """Change fields of an existing transaction; unspecified fields are kept."""

    api = obj.api()
    controller = TransactionFormController(api, obj.load_state(api), notify=notify)
    if not controller.begin_edit(transaction_id):
        notify(f"Transacción #{transaction_id} no encontrada.", "danger")
        raise click.exceptions.Exit(1)
    renames = {"tx_type": "type", "tx_date": "date"}
    values = dict(controller.values)
    for key, value in changes.items():
        if value is not None:
            values[renames.get(key, key)] = value
    entry = controller.submit(values)
    if entry is None:
        raise click.exceptions.Exit(1)
    click.secho(f"Movimiento #{entry.id} actualizado.", fg="green")


@main.command()
@click.argument("transaction_id", type=int)
@click.option("--yes", is_flag=True, help="Skip the confirmation prompt.")
@click.pass_obj
def delete(obj: ClientContext, transaction_id: int, yes: bool) -> None:
    """Delete a transaction after confirmation."""

    controller = TransactionFormController(obj.api(), LedgerState(), notify=notify)
    confirmed = yes or click.confirm(
        "¿Estás seguro de que quieres eliminar esta transacción?", default=False
    )
    if not confirmed:
        return
    if not controller.delete(transaction_id, lambda: True):
        raise click.exceptions.Exit(1)
    click.secho("Transacción eliminada correctamente.", fg="green")


@main.command()
@click.option("--threshold", default=None, help="Warn when the net balance is below this value.")
@click.pass_obj
def summary(obj: ClientContext, threshold: Optional[str]) -> None:
    """Totals, balances per account and the monthly breakdown."""

    snapshot = obj.load_state(obj.api()).snapshot(threshold)
    click.echo(f"Ingresos:      {format_currency(snapshot.totals.income)}")
    click.echo(f"Gastos:        {format_currency(snapshot.totals.expense)}")
    click.echo(f"Balance neto:  {format_currency(snapshot.totals.net)}")
    if snapshot.is_empty:
        click.echo("No hay transacciones para calcular saldos.")
    else:
        click.echo("\nSaldos por cuenta:")
        for account, balance in snapshot.balances.items():
            click.echo(f"  {account}: {format_currency(balance)}")
        click.echo("\nResumen mensual:")
        for month in snapshot.months:
            click.echo(
                f"  {month_label(month.month)}: balance {format_currency(month.balance)} "
                f"(ingresos {month.income_percent:.1f}%, gastos {month.expense_percent:.1f}%)"
            )
    if snapshot.categories:
        click.echo("\nGastos e inversiones por categoría:")
        for category, total in snapshot.categories.items():
            click.echo(f"  {category}: {format_currency(total)}")
    if snapshot.alert:
        notify(snapshot.alert, "warning")


@main.command("export-csv")
@click.option("--output", type=click.Path(dir_okay=False, path_type=Path), default=Path("transacciones.csv"))
@click.pass_obj
def export_csv(obj: ClientContext, output: Path) -> None:
    """Download all transactions as CSV."""

    body = obj.call(obj.api().export_csv, fallback="No se pudo generar el archivo CSV.")
    output.write_bytes(body)
    click.echo(f"CSV guardado en {output}")


@main.command("export-pdf")
@click.option(
    "--output", type=click.Path(dir_okay=False, path_type=Path), default=Path("reporte-transacciones.pdf")
)
@click.option("--local", is_flag=True, help="Render from the downloaded ledger instead of on the server.")
@click.pass_obj
def export_pdf(obj: ClientContext, output: Path, local: bool) -> None:
    """Download the PDF report, or render it locally with --local."""

    api = obj.api()
    if local:
        from .services.reports import render_pdf_report

        state = obj.load_state(api)
        if not state.entries:
            notify("No hay transacciones para exportar.", "warning")
            raise click.exceptions.Exit(1)
        body = render_pdf_report(state.entries)
    else:
        body = obj.call(api.export_pdf, fallback="No se pudo generar el reporte PDF.")
    output.write_bytes(body)
    click.echo(f"PDF guardado en {output}")
