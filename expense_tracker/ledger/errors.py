"""Mini README: Error taxonomy raised by the expense ledger and its store.

Each error also derives from the closest built-in exception so callers that
only know about ``ValueError`` or ``IndexError`` keep working.
"""

from __future__ import annotations


class LedgerError(Exception):
    """Base class for every ledger and persistence failure."""


class ValidationError(LedgerError, ValueError):
    """Raised when a candidate expense has an invalid amount, date or category."""


class OutOfRangeError(LedgerError, IndexError):
    """Raised when a positional removal targets a position that does not exist."""


class ExpenseNotFoundError(LedgerError, LookupError):
    """Raised when no expense carries the requested identifier."""


class PersistenceError(LedgerError, OSError):
    """Raised when stored ledger contents cannot be read back."""
