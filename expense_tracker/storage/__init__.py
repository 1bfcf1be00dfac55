"""Mini README: Persistence collaborators for the expense ledger.

Only a JSON file store ships today; alternative backends should expose the
same ``load()``/``save(records)`` pair so the web interface can swap them in.
"""

from .json_store import JsonExpenseStore

__all__ = ["JsonExpenseStore"]
