"""Mini README: Reactive state for the shift closing form.

Structure:
    * ClosingForm - raw inputs held in signals, totals held in computed values,
      plus one setter per input and the list row helpers.

Setters coerce raw UI input (numbers that do not parse become ``None``) and
write a new value; list edits always build a new tuple so snapshots taken
earlier, such as a batch in flight, never change underneath their holder.
Totals are recomputed lazily the next time they are read. A numeric write
that would make any total overflow to infinity is undone and refused with
``ValueError``.
"""

from __future__ import annotations

import math
from dataclasses import replace
from typing import Any, Dict, Optional, Tuple

from ..ledger import (
    DEFAULT_CASH_ENTRIES,
    DEFAULT_EXPENSES,
    CashEntry,
    ClosingValues,
    ExpenseEntry,
    Shift,
)
from ..logging_utils import get_logger
from ..utils import Computed, Signal, parse_amount, parse_text

LOGGER = get_logger(__name__)

CASH_FIELDS = ("denomination", "quantity")


def _check_index(index: int, rows: Tuple[object, ...], label: str) -> None:
    if not 0 <= index < len(rows):
        raise IndexError(f"{label} row {index} does not exist")


class ClosingForm:
    """Inputs and derived totals for one shift closing."""

    def __init__(self) -> None:
        self.closer_name: Signal[str] = Signal("", name="closer_name")
        self.shift: Signal[Shift] = Signal(Shift.MORNING, name="shift")
        self.first_data_income: Signal[Optional[float]] = Signal(None, name="first_data_income")
        self.pedidos_ya_income: Signal[Optional[float]] = Signal(None, name="pedidos_ya_income")
        self.mercado_pago_income: Signal[Optional[float]] = Signal(None, name="mercado_pago_income")
        self.daily_summary: Signal[Optional[float]] = Signal(None, name="daily_summary")
        self.cash_entries: Signal[Tuple[CashEntry, ...]] = Signal(
            DEFAULT_CASH_ENTRIES, name="cash_entries"
        )
        self.expenses: Signal[Tuple[ExpenseEntry, ...]] = Signal(DEFAULT_EXPENSES, name="expenses")

        self.cash_subtotal = Computed(
            lambda: sum((entry.subtotal for entry in self.cash_entries.get()), 0.0),
            name="cash_subtotal",
        )
        self.expenses_subtotal = Computed(
            lambda: sum((expense.amount or 0.0 for expense in self.expenses.get()), 0.0),
            name="expenses_subtotal",
        )
        self.digital_income_subtotal = Computed(
            lambda: (self.first_data_income.get() or 0.0)
            + (self.pedidos_ya_income.get() or 0.0)
            + (self.mercado_pago_income.get() or 0.0),
            name="digital_income_subtotal",
        )
        self.total_income = Computed(
            lambda: self.digital_income_subtotal.get() + self.cash_subtotal.get(),
            name="total_income",
        )
        # Display only; the batch reconciles against absolute_total.
        self.net_total = Computed(
            lambda: self.total_income.get() - self.expenses_subtotal.get(),
            name="net_total",
        )
        self.absolute_total = Computed(
            lambda: self.total_income.get() + self.expenses_subtotal.get(),
            name="absolute_total",
        )
        self.difference = Computed(
            lambda: self.absolute_total.get() - (self.daily_summary.get() or 0.0),
            name="difference",
        )
        self._totals = (
            self.cash_subtotal,
            self.expenses_subtotal,
            self.digital_income_subtotal,
            self.total_income,
            self.net_total,
            self.absolute_total,
            self.difference,
        )

    def _write(self, signal: Signal[Any], value: Any) -> None:
        """Store ``value`` unless it would push a total out of the finite range."""

        previous = signal.get()
        signal.set(value)
        overflowing = [total.name for total in self._totals if not math.isfinite(total.get())]
        if overflowing:
            signal.set(previous)
            raise ValueError(f"Value too large: {', '.join(overflowing)} would not be finite")

    # Scalar inputs ---------------------------------------------------------

    def set_closer_name(self, raw: object) -> None:
        self.closer_name.set(parse_text(raw))

    def set_shift(self, raw: object) -> None:
        """Select the shift; unknown values raise ``ValueError``."""

        self.shift.set(raw if isinstance(raw, Shift) else Shift.from_str(str(raw)))

    def set_first_data_income(self, raw: object) -> None:
        self._write(self.first_data_income, parse_amount(raw))

    def set_pedidos_ya_income(self, raw: object) -> None:
        self._write(self.pedidos_ya_income, parse_amount(raw))

    def set_mercado_pago_income(self, raw: object) -> None:
        self._write(self.mercado_pago_income, parse_amount(raw))

    def set_daily_summary(self, raw: object) -> None:
        self._write(self.daily_summary, parse_amount(raw))

    # Cash rows ---------------------------------------------------------------

    def add_cash_entry(self) -> None:
        self.cash_entries.update(lambda rows: rows + (CashEntry(),))
        LOGGER.debug("Added cash row; %s rows now", len(self.cash_entries.get()))

    def remove_cash_entry(self, index: int) -> None:
        rows = self.cash_entries.get()
        _check_index(index, rows, "Cash")
        self._write(self.cash_entries, rows[:index] + rows[index + 1 :])
        LOGGER.debug("Removed cash row %s", index)

    def update_cash_entry(self, index: int, field: str, raw: object) -> None:
        """Replace one field of one cash row, leaving everything else intact."""

        if field not in CASH_FIELDS:
            raise ValueError(f"Unknown cash field '{field}'")
        rows = self.cash_entries.get()
        _check_index(index, rows, "Cash")
        updated = replace(rows[index], **{field: parse_amount(raw)})
        self._write(self.cash_entries, rows[:index] + (updated,) + rows[index + 1 :])

    # Expense rows ------------------------------------------------------------

    def add_expense(self) -> None:
        self.expenses.update(lambda rows: rows + (ExpenseEntry(),))
        LOGGER.debug("Added expense row; %s rows now", len(self.expenses.get()))

    def remove_expense(self, index: int) -> None:
        rows = self.expenses.get()
        _check_index(index, rows, "Expense")
        self._write(self.expenses, rows[:index] + rows[index + 1 :])
        LOGGER.debug("Removed expense row %s", index)

    def set_expense_detail(self, index: int, raw: object) -> None:
        rows = self.expenses.get()
        _check_index(index, rows, "Expense")
        updated = replace(rows[index], detail=parse_text(raw))
        self._write(self.expenses, rows[:index] + (updated,) + rows[index + 1 :])

    def set_expense_amount(self, index: int, raw: object) -> None:
        rows = self.expenses.get()
        _check_index(index, rows, "Expense")
        updated = replace(rows[index], amount=parse_amount(raw))
        self._write(self.expenses, rows[:index] + (updated,) + rows[index + 1 :])

    # Lifecycle ---------------------------------------------------------------

    def reset(self) -> None:
        """Return every input to its default seed."""

        self.closer_name.set("")
        self.shift.set(Shift.MORNING)
        self.first_data_income.set(None)
        self.pedidos_ya_income.set(None)
        self.mercado_pago_income.set(None)
        self.daily_summary.set(None)
        self.cash_entries.set(DEFAULT_CASH_ENTRIES)
        self.expenses.set(DEFAULT_EXPENSES)
        LOGGER.info("Closing form reset to defaults")

    def capture(self) -> ClosingValues:
        """Freeze the current inputs and the totals the batch relies on."""

        return ClosingValues(
            closer_name=self.closer_name.get(),
            shift=self.shift.get(),
            first_data_income=self.first_data_income.get(),
            pedidos_ya_income=self.pedidos_ya_income.get(),
            mercado_pago_income=self.mercado_pago_income.get(),
            cash_subtotal=self.cash_subtotal.get(),
            expenses=self.expenses.get(),
            daily_summary=self.daily_summary.get(),
            difference=self.difference.get(),
        )

    def snapshot(self) -> Dict[str, Any]:
        """Export inputs and totals with serialisable values."""

        return {
            "closer_name": self.closer_name.get(),
            "shift": self.shift.get().value,
            "first_data_income": self.first_data_income.get(),
            "pedidos_ya_income": self.pedidos_ya_income.get(),
            "mercado_pago_income": self.mercado_pago_income.get(),
            "daily_summary": self.daily_summary.get(),
            "cash_entries": [entry.as_dict() for entry in self.cash_entries.get()],
            "expenses": [expense.as_dict() for expense in self.expenses.get()],
            "totals": {
                "cash_subtotal": self.cash_subtotal.get(),
                "expenses_subtotal": self.expenses_subtotal.get(),
                "digital_income_subtotal": self.digital_income_subtotal.get(),
                "total_income": self.total_income.get(),
                "net_total": self.net_total.get(),
                "absolute_total": self.absolute_total.get(),
                "difference": self.difference.get(),
            },
        }
