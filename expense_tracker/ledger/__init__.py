"""Mini README: Expense ledger and its error taxonomy.

The ledger is the computational heart of the tracker: it validates incoming
expenses, keeps them in insertion order, and derives the totals shown on the
dashboard (overall, current month, per category, per month of a year).
Persistence and presentation live in sibling packages and consume the
ledger through ``snapshot()`` and the aggregate methods.
"""

from .errors import (
    ExpenseNotFoundError,
    LedgerError,
    OutOfRangeError,
    PersistenceError,
    ValidationError,
)
from .ledger import Expense, ExpenseLedger, validate_candidate

__all__ = [
    "Expense",
    "ExpenseLedger",
    "ExpenseNotFoundError",
    "LedgerError",
    "OutOfRangeError",
    "PersistenceError",
    "ValidationError",
    "validate_candidate",
]
