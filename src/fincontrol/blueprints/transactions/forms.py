"""Transaction payload validation helpers."""

from __future__ import annotations

import datetime as dt
from collections.abc import Mapping
from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Optional

from ...domain.entities import TransactionFields
from ...errors import ValidationError
from ...models.transaction import TransactionType

REQUIRED_FIELDS = ("type", "date", "description", "amount", "account")
MISSING_MESSAGE = "Faltan campos requeridos: {fields}."
_CENT = Decimal("0.01")
_AMOUNT_LIMIT = Decimal("1e10")
MAX_TEXT_LENGTHS = {"description": 255, "account": 64, "category": 64}


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


@dataclass(slots=True)
class TransactionForm:
    """Represents a transaction JSON body prior to validation."""

    raw_data: dict[str, Any] = field(default_factory=dict)
    errors: dict[str, list[str]] = field(default_factory=dict, init=False)
    cleaned: Optional[TransactionFields] = field(default=None, init=False)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any] | None) -> TransactionForm:
        """Create a form populated from request data."""

        if data is not None and not isinstance(data, Mapping):
            data = {}
        keys = REQUIRED_FIELDS + ("category",)
        return cls(raw_data={key: (data or {}).get(key) for key in keys})

    def missing_fields(self) -> list[str]:
        return [name for name in REQUIRED_FIELDS if _is_blank(self.raw_data.get(name))]

    def validate(self) -> bool:
        """Validate the bound data and populate ``cleaned``."""

        self.errors.clear()
        self.cleaned = None
        for name in self.missing_fields():
            self._add_error(name, "Campo requerido.")
        if self.errors:
            return False

        tx_type = self._parse_type(self.raw_data["type"])
        occurred = self._parse_date(self.raw_data["date"])
        amount = self._parse_amount(self.raw_data["amount"])
        description = str(self.raw_data["description"]).strip()
        account = str(self.raw_data["account"]).strip()
        category_raw = self.raw_data.get("category")
        category = None if _is_blank(category_raw) else str(category_raw).strip()
        self._check_length("description", description)
        self._check_length("account", account)
        self._check_length("category", category)

        if self.errors:
            return False
        self.cleaned = TransactionFields(
            type=tx_type,  # type: ignore[arg-type]
            date=occurred,  # type: ignore[arg-type]
            description=description,
            amount=amount,  # type: ignore[arg-type]
            account=account,
            category=category,
        )
        return True

    def cleaned_or_raise(self) -> TransactionFields:
        """Validate and return the typed fields, raising ValidationError on failure."""

        if not self.validate():
            missing = self.missing_fields()
            if missing:
                raise ValidationError(MISSING_MESSAGE.format(fields=", ".join(missing)))
            first_field, messages = next(iter(self.errors.items()))
            raise ValidationError(f"{first_field}: {messages[0]}")
        assert self.cleaned is not None
        return self.cleaned

    def _parse_type(self, value: Any) -> Optional[TransactionType]:
        try:
            return TransactionType(str(value).strip())
        except ValueError:
            allowed = ", ".join(t.value for t in TransactionType)
            self._add_error("type", f"Tipo inválido; use uno de: {allowed}.")
            return None

    def _parse_date(self, value: Any) -> Optional[dt.date]:
        text = str(value).strip()
        try:
            # Accept full ISO timestamps as sent by date pickers.
            return dt.date.fromisoformat(text[:10])
        except ValueError:
            self._add_error("date", "Fecha inválida (AAAA-MM-DD).")
            return None

    def _parse_amount(self, value: Any) -> Optional[Decimal]:
        if isinstance(value, bool):
            self._add_error("amount", "El monto debe ser numérico.")
            return None
        try:
            amount = Decimal(str(value).strip())
        except InvalidOperation:
            self._add_error("amount", "El monto debe ser numérico.")
            return None
        if not amount.is_finite():
            self._add_error("amount", "El monto debe ser numérico.")
            return None
        if amount < 0:
            self._add_error("amount", "El monto no puede ser negativo.")
            return None
        if amount >= _AMOUNT_LIMIT:
            self._add_error("amount", "El monto excede el máximo permitido.")
            return None
        try:
            return amount.quantize(_CENT, rounding=ROUND_HALF_UP)
        except InvalidOperation:
            self._add_error("amount", "El monto debe ser numérico.")
            return None

    def _check_length(self, name: str, value: Optional[str]) -> None:
        limit = MAX_TEXT_LENGTHS[name]
        if value is not None and len(value) > limit:
            self._add_error(name, f"Admite {limit} caracteres como máximo.")

    def _add_error(self, name: str, message: str) -> None:
        """Accumulate validation errors for a specific field."""

        self.errors.setdefault(name, []).append(message)
