"""Domain layer for compta application.

Services are imported lazily: the database layer imports the entities module
from this package, and the services import the database layer.
"""

_SERVICES = {
    "AccountService": "compta.domain.account",
    "JournalService": "compta.domain.journal",
    "FiscalYearService": "compta.domain.fiscal_year",
    "EntryService": "compta.domain.entry",
    "LedgerService": "compta.domain.ledger",
    "StatementService": "compta.domain.statements",
    "ReconciliationService": "compta.domain.reconciliation",
    "LetteringService": "compta.domain.lettering",
}

__all__ = list(_SERVICES)


def __getattr__(name):
    if name in _SERVICES:
        import importlib

        return getattr(importlib.import_module(_SERVICES[name]), name)
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
