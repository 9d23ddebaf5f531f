"""Mini README: Core package initializer for the shift close service.

The package reconciles a cash drawer at the end of a shift: it gathers cash
counts, digital channel totals, expenses and the closer's manual summary,
derives the totals, and posts the resulting ledger entries to a webhook.
Only the logging helper is re-exported here so importing the package stays
free of web framework dependencies.
"""

from .logging_utils import get_logger

__all__ = ["get_logger"]
