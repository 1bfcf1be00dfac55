"""Mini README: Package initialiser for the personal expense tracker.

The tracker records expenses in an in-memory ledger, persists them to a
local JSON file after every change, and renders a dashboard with category
and monthly spending charts. Only the logging helper is re-exported here so
importing the package stays free of web framework imports.
"""

from .logging_utils import get_logger

__all__ = ["get_logger"]
