"""Mini README: Ledger records produced when a shift is closed.

Structure:
    * Shift - enum of the two shifts with their wire literals.
    * CashEntry / ExpenseEntry - immutable form rows edited by replacement.
    * LogEntry - one signed ledger line posted to the webhook.
    * ClosingValues - frozen capture of the form at submit time.
    * build_log_entries - turn a capture into the ordered ledger batch.

Income lines carry positive amounts and expenses negative ones. The labels
below are the accounting categories the downstream sheet groups by, so they
are kept verbatim.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Dict, List, Optional, Tuple

from ..logging_utils import get_logger

LOGGER = get_logger(__name__)

CARD_SALES = ("Ventas con Tarjeta", "Ingreso: First Data")
DELIVERY_SALES = ("Ventas Delivery", "Ingreso: PedidosYa")
DIGITAL_SALES = ("Ventas Digitales", "Ingreso: Mercado Pago")
CASH_SALES = ("Ventas en Efectivo", "Ingreso: Efectivo")
OPERATING_EXPENSES = "Gastos Operativos"
EXPENSE_LABEL_TEMPLATE = "Gasto: {detail}"
CLOSING = "Cierre"
MANUAL_SUMMARY_LABEL = "Resumen Diario (Manual)"
DIFFERENCE_LABEL = "Diferencia de Caja"


class Shift(str, Enum):
    """Enumerate the shifts a closer can report for."""

    MORNING = "mañana"
    AFTERNOON = "tarde"

    @classmethod
    def from_str(cls, value: str) -> "Shift":
        """Accept the wire literal or the member name in any casing."""

        try:
            normalised = value.strip().lower()
        except AttributeError as error:
            raise ValueError(f"Unsupported shift: {value}") from error
        for member in cls:
            if normalised in (member.value, member.name.lower()):
                return member
        raise ValueError(f"Unsupported shift: {value}")


@dataclass(frozen=True, slots=True)
class CashEntry:
    """Count of notes or coins for one denomination."""

    denomination: Optional[float] = None
    quantity: Optional[float] = None

    @property
    def subtotal(self) -> float:
        return (self.denomination or 0.0) * (self.quantity or 0.0)

    def as_dict(self) -> Dict[str, Optional[float]]:
        return {"denomination": self.denomination, "quantity": self.quantity}


@dataclass(frozen=True, slots=True)
class ExpenseEntry:
    """Cash paid out of the drawer during the shift."""

    detail: str = ""
    amount: Optional[float] = None

    @property
    def is_postable(self) -> bool:
        """Whether the row has both a description and a positive amount."""

        return bool(self.detail) and self.amount is not None and self.amount > 0

    def as_dict(self) -> Dict[str, object]:
        return {"detail": self.detail, "amount": self.amount}


DEFAULT_CASH_ENTRIES: Tuple[CashEntry, ...] = (
    CashEntry(denomination=20000.0),
    CashEntry(denomination=10000.0),
    CashEntry(denomination=2000.0),
)
DEFAULT_EXPENSES: Tuple[ExpenseEntry, ...] = (ExpenseEntry(),)


def format_timestamp(moment: datetime) -> str:
    """Render a timestamp as UTC ISO-8601 with millisecond precision."""

    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    moment = moment.astimezone(timezone.utc)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


@dataclass(frozen=True, slots=True)
class LogEntry:
    """Single ledger line sent to the logging webhook."""

    day: str
    closer_name: str
    shift: Shift
    accounting_imputation: str
    account_entry: str
    amount: float

    def as_dict(self) -> Dict[str, object]:
        """Export using the field names the webhook expects."""

        return {
            "day": self.day,
            "closerName": self.closer_name,
            "shift": self.shift.value,
            "accountingImputation": self.accounting_imputation,
            "accountEntry": self.account_entry,
            "amount": self.amount,
        }


@dataclass(frozen=True, slots=True)
class ClosingValues:
    """Everything the batch needs, captured once from the form."""

    closer_name: str
    shift: Shift
    first_data_income: Optional[float]
    pedidos_ya_income: Optional[float]
    mercado_pago_income: Optional[float]
    cash_subtotal: float
    expenses: Tuple[ExpenseEntry, ...]
    daily_summary: Optional[float]
    difference: float


def build_log_entries(values: ClosingValues, now: datetime) -> List[LogEntry]:
    """Return the ordered ledger batch for a closing, all stamped with ``now``."""

    day = format_timestamp(now)
    batch: List[LogEntry] = []

    def emit(imputation: str, label: str, amount: float) -> None:
        batch.append(
            LogEntry(
                day=day,
                closer_name=values.closer_name,
                shift=values.shift,
                accounting_imputation=imputation,
                account_entry=label,
                amount=amount,
            )
        )

    channels = (
        (values.first_data_income, CARD_SALES),
        (values.pedidos_ya_income, DELIVERY_SALES),
        (values.mercado_pago_income, DIGITAL_SALES),
    )
    for amount, (imputation, label) in channels:
        if amount is not None and amount > 0:
            emit(imputation, label, amount)

    if values.cash_subtotal > 0:
        emit(*CASH_SALES, values.cash_subtotal)

    for expense in values.expenses:
        if expense.is_postable:
            emit(
                OPERATING_EXPENSES,
                EXPENSE_LABEL_TEMPLATE.format(detail=expense.detail),
                -expense.amount,  # type: ignore[operator]
            )

    if values.daily_summary is not None:
        emit(CLOSING, MANUAL_SUMMARY_LABEL, values.daily_summary)
        emit(CLOSING, DIFFERENCE_LABEL, values.difference)

    LOGGER.debug("Built %s ledger entries for closer '%s'", len(batch), values.closer_name)
    return batch
