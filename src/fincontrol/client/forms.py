"""Create/edit form controller for the client."""

from __future__ import annotations

from enum import Enum
from typing import Any, Callable, Optional

from ..logging_config import get_logger
from .api import ApiClient, ApiError
from .state import LedgerEntry, LedgerState

logger = get_logger("client.forms")

Notifier = Callable[[str, str], None]
Confirm = Callable[[], bool]

FORM_FIELDS = ("type", "date", "description", "amount", "category", "account")
CREATE_LABEL = "Registrar Movimiento"
EDIT_TITLE = "Editando Movimiento"
EDIT_LABEL = "Actualizar Movimiento"


class FormMode(str, Enum):
    CREATE = "create"
    EDIT = "edit"


def _log_notifier(message: str, level: str) -> None:
    logger.warning(message, extra={"level": level})


def _empty_values() -> dict[str, Any]:
    return {name: "" for name in FORM_FIELDS}


class TransactionFormController:
    """Two-state form: CREATE by default, EDIT while holding a transaction id."""

    def __init__(
        self,
        api: ApiClient,
        state: LedgerState,
        *,
        notify: Notifier | None = None,
    ) -> None:
        self.api = api
        self.state = state
        self.notify = notify if notify is not None else _log_notifier
        self.mode = FormMode.CREATE
        self.editing_id: Optional[int] = None
        self.values: dict[str, Any] = _empty_values()
        self.submitting = False

    @property
    def title(self) -> str:
        return EDIT_TITLE if self.mode is FormMode.EDIT else CREATE_LABEL

    @property
    def submit_label(self) -> str:
        if self.submitting:
            return "Actualizando..." if self.mode is FormMode.EDIT else "Guardando..."
        return EDIT_LABEL if self.mode is FormMode.EDIT else CREATE_LABEL

    @property
    def submit_style(self) -> str:
        return "primary" if self.mode is FormMode.EDIT else "success"

    def begin_edit(self, entry_id: int) -> bool:
        """Populate the form from a held transaction; False when it is unknown."""

        entry = self.state.find(entry_id)
        if entry is None:
            return False
        payload = entry.to_payload()
        self.values = {name: payload.get(name) if payload.get(name) is not None else "" for name in FORM_FIELDS}
        self.mode = FormMode.EDIT
        self.editing_id = entry_id
        return True

    def cancel(self) -> None:
        self.mode = FormMode.CREATE
        self.editing_id = None
        self.values = _empty_values()

    def submit(self, values: Optional[dict[str, Any]] = None) -> Optional[LedgerEntry]:
        """Send the form; returns the canonical entry, or None on failure or re-entry."""

        if self.submitting:
            return None
        if values is not None:
            self.values = {**_empty_values(), **values}
        payload = dict(self.values)
        editing = self.mode is FormMode.EDIT
        self.submitting = True
        try:
            if editing:
                raw = self.api.update_transaction(self.editing_id, payload)  # type: ignore[arg-type]
            else:
                raw = self.api.create_transaction(payload)
            entry = LedgerEntry.from_dict(raw)
        except ApiError as exc:
            action = "actualizar" if editing else "crear"
            logger.error("Submit failed", extra={"status": exc.status, "detail": exc.message})
            self.notify(f"No se pudo {action} la transacción.", "danger")
            return None
        finally:
            self.submitting = False

        if editing:
            if not self.state.replace(entry):
                self.state.prepend(entry)
        else:
            self.state.prepend(entry)
        self.cancel()
        return entry

    def delete(self, entry_id: int, confirm: Confirm) -> bool:
        """Delete after interactive confirmation; the entry leaves state without a reload."""

        if not confirm():
            return False
        try:
            self.api.delete_transaction(entry_id)
        except ApiError as exc:
            logger.error("Delete failed", extra={"status": exc.status, "detail": exc.message})
            self.notify("No se pudo eliminar la transacción.", "danger")
            return False
        self.state.remove(entry_id)
        if self.editing_id == entry_id:
            self.cancel()
        return True
