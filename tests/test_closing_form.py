"""Mini README: Tests for the closing form handlers and derived totals.

Structure:
    * test_cash_subtotal_treats_absent_fields_as_zero - cash rows with a missing quantity contribute nothing to the subtotal.
    * test_totals_follow_their_definitions - every derived total should match its arithmetic definition.
    * test_difference_without_summary_equals_absolute_total - without a manual summary the difference is the whole absolute total.
    * test_unparseable_numbers_become_absent - blank, non-numeric and non-finite inputs are stored as absent.
    * test_zero_is_distinct_from_absent - an entered zero is kept as a present value.
    * test_totals_refresh_after_each_edit - totals reflect the latest row edits on the next read.
    * test_row_updates_are_copy_on_write - editing a row builds a new tuple and leaves earlier references intact.
    * test_expense_detail_and_amount_are_independent - updating one expense field keeps the other field of the row.
    * test_add_and_remove_rows_shift_indices - appending adds blank rows and removal shifts later rows down.
    * test_out_of_range_rows_raise_index_error - row helpers reject indices outside the current list.
    * test_unknown_cash_field_is_rejected - only denomination and quantity can be edited on a cash row.
    * test_shift_accepts_wire_literals_and_names - shift input accepts the wire literal or member name and rejects others.
    * test_reset_restores_default_seed - reset returns every input to the default seed.
    * test_snapshot_exposes_inputs_and_totals - the snapshot carries raw inputs and every derived total.
    * test_overflowing_cash_row_is_refused_and_undone - a cash edit that would make a total infinite raises and leaves the row unchanged.
    * test_overflowing_income_is_refused - digital incomes whose sum overflows are rejected without touching the field.
"""

from __future__ import annotations

import math

import pytest

from shiftclose.form import ClosingForm
from shiftclose.ledger import DEFAULT_CASH_ENTRIES, DEFAULT_EXPENSES, CashEntry, ExpenseEntry, Shift


def test_cash_subtotal_treats_absent_fields_as_zero() -> None:
    """Cash rows with a missing quantity contribute nothing to the subtotal."""

    form = ClosingForm()
    form.update_cash_entry(0, "quantity", "2")

    assert form.cash_entries.get()[0] == CashEntry(denomination=20000.0, quantity=2.0)
    assert form.cash_subtotal.get() == pytest.approx(40000.0)


def test_totals_follow_their_definitions() -> None:
    """Every derived total should match its arithmetic definition."""

    form = ClosingForm()
    form.set_first_data_income("100")
    form.set_pedidos_ya_income("50.5")
    form.set_mercado_pago_income("")
    form.update_cash_entry(1, "quantity", "3")
    form.set_expense_amount(0, "15")
    form.add_expense()
    form.set_expense_amount(1, "5")
    form.set_daily_summary("30000")

    assert form.digital_income_subtotal.get() == pytest.approx(150.5)
    assert form.expenses_subtotal.get() == pytest.approx(20.0)
    assert form.total_income.get() == pytest.approx(30150.5)
    assert form.net_total.get() == pytest.approx(30130.5)
    assert form.absolute_total.get() == pytest.approx(30170.5)
    assert form.difference.get() == pytest.approx(170.5)


def test_difference_without_summary_equals_absolute_total() -> None:
    """Without a manual summary the difference is the whole absolute total."""

    form = ClosingForm()
    form.set_first_data_income(10)

    assert form.daily_summary.get() is None
    assert form.difference.get() == pytest.approx(form.absolute_total.get())


@pytest.mark.parametrize("raw", ["", "   ", "abc", "nan", "inf", None, True])
def test_unparseable_numbers_become_absent(raw: object) -> None:
    """Blank, non-numeric and non-finite inputs are stored as absent."""

    form = ClosingForm()
    form.set_daily_summary("5")
    form.set_daily_summary(raw)

    assert form.daily_summary.get() is None


def test_zero_is_distinct_from_absent() -> None:
    """An entered zero is kept as a present value."""

    form = ClosingForm()
    form.set_daily_summary("0")

    assert form.daily_summary.get() == 0.0


def test_totals_refresh_after_each_edit() -> None:
    """Totals reflect the latest row edits on the next read."""

    form = ClosingForm()
    assert form.cash_subtotal.get() == 0.0

    form.update_cash_entry(2, "quantity", "1")
    assert form.cash_subtotal.get() == pytest.approx(2000.0)

    form.remove_cash_entry(2)
    assert form.cash_subtotal.get() == 0.0


def test_row_updates_are_copy_on_write() -> None:
    """Editing a row builds a new tuple and leaves earlier references intact."""

    form = ClosingForm()
    before = form.cash_entries.get()

    form.update_cash_entry(0, "quantity", "4")

    after = form.cash_entries.get()
    assert before == DEFAULT_CASH_ENTRIES
    assert after is not before
    assert after[0].denomination == 20000.0
    assert after[1:] == before[1:]


def test_expense_detail_and_amount_are_independent() -> None:
    """Updating one expense field keeps the other field of the row."""

    form = ClosingForm()
    form.set_expense_detail(0, "ice")
    form.set_expense_amount(0, "15")
    form.set_expense_detail(0, "ice bags")

    assert form.expenses.get() == (ExpenseEntry(detail="ice bags", amount=15.0),)


def test_add_and_remove_rows_shift_indices() -> None:
    """Appending adds blank rows and removal shifts later rows down."""

    form = ClosingForm()
    form.add_cash_entry()
    assert form.cash_entries.get()[-1] == CashEntry()

    form.remove_cash_entry(0)
    assert [entry.denomination for entry in form.cash_entries.get()] == [10000.0, 2000.0, None]

    form.add_expense()
    form.set_expense_detail(1, "napkins")
    form.remove_expense(0)
    assert form.expenses.get() == (ExpenseEntry(detail="napkins"),)


def test_out_of_range_rows_raise_index_error() -> None:
    """Row helpers reject indices outside the current list."""

    form = ClosingForm()

    with pytest.raises(IndexError):
        form.update_cash_entry(3, "quantity", "1")
    with pytest.raises(IndexError):
        form.remove_expense(-1)
    with pytest.raises(IndexError):
        form.set_expense_amount(1, "2")


def test_unknown_cash_field_is_rejected() -> None:
    """Only denomination and quantity can be edited on a cash row."""

    form = ClosingForm()

    with pytest.raises(ValueError):
        form.update_cash_entry(0, "colour", "1")


def test_shift_accepts_wire_literals_and_names() -> None:
    """Shift input accepts the wire literal or member name and rejects others."""

    form = ClosingForm()
    form.set_shift("tarde")
    assert form.shift.get() is Shift.AFTERNOON

    form.set_shift("MORNING")
    assert form.shift.get() is Shift.MORNING

    with pytest.raises(ValueError):
        form.set_shift("night")


def test_reset_restores_default_seed() -> None:
    """Reset returns every input to the default seed."""

    form = ClosingForm()
    form.set_closer_name("Ana")
    form.set_shift("tarde")
    form.set_first_data_income("1")
    form.set_pedidos_ya_income("2")
    form.set_mercado_pago_income("3")
    form.set_daily_summary("4")
    form.add_cash_entry()
    form.update_cash_entry(0, "quantity", "5")
    form.set_expense_detail(0, "ice")

    form.reset()

    assert form.closer_name.get() == ""
    assert form.shift.get() is Shift.MORNING
    assert form.first_data_income.get() is None
    assert form.pedidos_ya_income.get() is None
    assert form.mercado_pago_income.get() is None
    assert form.daily_summary.get() is None
    assert form.cash_entries.get() == DEFAULT_CASH_ENTRIES
    assert form.expenses.get() == DEFAULT_EXPENSES
    assert form.cash_subtotal.get() == 0.0


def test_snapshot_exposes_inputs_and_totals() -> None:
    """The snapshot carries raw inputs and every derived total."""

    form = ClosingForm()
    form.set_closer_name("Ana")
    form.update_cash_entry(0, "quantity", "1")

    snapshot = form.snapshot()

    assert snapshot["closer_name"] == "Ana"
    assert snapshot["shift"] == "mañana"
    assert snapshot["cash_entries"][0] == {"denomination": 20000.0, "quantity": 1.0}
    assert snapshot["expenses"] == [{"detail": "", "amount": None}]
    assert snapshot["totals"]["cash_subtotal"] == pytest.approx(20000.0)
    assert set(snapshot["totals"]) == {
        "cash_subtotal",
        "expenses_subtotal",
        "digital_income_subtotal",
        "total_income",
        "net_total",
        "absolute_total",
        "difference",
    }


def test_overflowing_cash_row_is_refused_and_undone() -> None:
    """A cash edit that would make a total infinite raises and leaves the row unchanged."""

    form = ClosingForm()
    form.update_cash_entry(0, "denomination", "1e200")
    before = form.cash_entries.get()

    with pytest.raises(ValueError):
        form.update_cash_entry(0, "quantity", "1e200")

    assert form.cash_entries.get() == before
    assert form.cash_subtotal.get() == 0.0
    assert all(math.isfinite(value) for value in form.snapshot()["totals"].values())


def test_overflowing_income_is_refused() -> None:
    """Digital incomes whose sum overflows are rejected without touching the field."""

    form = ClosingForm()
    form.set_first_data_income("1e308")

    with pytest.raises(ValueError):
        form.set_pedidos_ya_income("1e308")

    assert form.pedidos_ya_income.get() is None
    assert form.digital_income_subtotal.get() == pytest.approx(1e308)
