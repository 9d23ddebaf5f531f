"""Mini README: Closing form state and its mutation handlers."""

from .state import CASH_FIELDS, ClosingForm

__all__ = ["CASH_FIELDS", "ClosingForm"]
