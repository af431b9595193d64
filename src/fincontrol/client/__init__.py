"""Command-line client: API access, token storage, ledger state and form control."""

from .api import ApiClient, ApiError
from .forms import FormMode, TransactionFormController
from .session import TokenStore
from .state import LedgerEntry, LedgerSnapshot, LedgerState

__all__ = [
    "ApiClient",
    "ApiError",
    "FormMode",
    "LedgerEntry",
    "LedgerSnapshot",
    "LedgerState",
    "TokenStore",
    "TransactionFormController",
]
