"""Mini README: Coercion helpers for raw form input.

Keeping these separate from the form lets the web layer and the tests share
the exact "not a number becomes absent" rule without importing FastAPI.
"""

from __future__ import annotations

import math
from typing import Optional


def parse_amount(value: object) -> Optional[float]:
    """Return a finite float, or ``None`` when the input is not a usable number."""

    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    try:
        number = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number):
        return None
    return number


def parse_text(value: object) -> str:
    """Return the raw text of an input, treating ``None`` as empty."""

    if value is None:
        return ""
    return str(value)
