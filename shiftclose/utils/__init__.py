"""Mini README: Utility helpers shared across shift close modules."""

from .parsing import parse_amount, parse_text
from .reactive import Computed, Signal

__all__ = ["Computed", "Signal", "parse_amount", "parse_text"]
