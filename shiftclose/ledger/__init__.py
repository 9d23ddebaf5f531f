"""Mini README: Ledger records and batch construction for shift closings.

The ``entries`` module defines the immutable rows the closing form edits,
the signed ``LogEntry`` posted to the webhook, and ``build_log_entries``
which turns a frozen capture of the form into the ordered batch.
"""

from .entries import (
    DEFAULT_CASH_ENTRIES,
    DEFAULT_EXPENSES,
    CashEntry,
    ClosingValues,
    ExpenseEntry,
    LogEntry,
    Shift,
    build_log_entries,
    format_timestamp,
)

__all__ = [
    "CashEntry",
    "ClosingValues",
    "DEFAULT_CASH_ENTRIES",
    "DEFAULT_EXPENSES",
    "ExpenseEntry",
    "LogEntry",
    "Shift",
    "build_log_entries",
    "format_timestamp",
]
