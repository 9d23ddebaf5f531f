"""Mini README: Submission lifecycle for a shift closing.

Structure:
    * SubmissionStatus - idle, sending, success or error.
    * SubmissionInProgressError - raised when submitting during a send.
    * SubmissionGateway - validates the form, builds the batch, delivers it
      and applies the outcome to the status, the history and the form.

Allowed transitions are ``idle|error -> sending -> success|error`` and
``success -> idle``. The return to idle after a success is an event loop
timer; starting another submission cancels it and performs that return
immediately. The form is reset only after the webhook accepted the batch.
"""

from __future__ import annotations

import asyncio
from datetime import datetime, timezone
from enum import Enum
from typing import Callable, Dict, FrozenSet, List, Optional

from ..form import ClosingForm
from ..ledger import LogEntry, build_log_entries
from ..logging_utils import get_logger
from ..utils import Signal
from .history import HistoryLog
from .transport import WebhookDeliveryError, WebhookTransport

LOGGER = get_logger(__name__)

VALIDATION_MESSAGE = "Por favor, complete su nombre y el turno antes de enviar."
NOTHING_TO_SUBMIT_MESSAGE = "No hay movimientos para registrar."
NETWORK_ERROR_MESSAGE = "Error de red/CORS. Verifique la conexión."
SERVER_ERROR_TEMPLATE = "Error del servidor: {status}."
GENERIC_ERROR_MESSAGE = "Error al enviar. Intente de nuevo."


class SubmissionStatus(str, Enum):
    """Enumerate the states of the submission banner."""

    IDLE = "idle"
    SENDING = "sending"
    SUCCESS = "success"
    ERROR = "error"


ALLOWED_TRANSITIONS: Dict[SubmissionStatus, FrozenSet[SubmissionStatus]] = {
    SubmissionStatus.IDLE: frozenset({SubmissionStatus.SENDING}),
    SubmissionStatus.SENDING: frozenset({SubmissionStatus.SUCCESS, SubmissionStatus.ERROR}),
    SubmissionStatus.SUCCESS: frozenset({SubmissionStatus.IDLE}),
    SubmissionStatus.ERROR: frozenset({SubmissionStatus.SENDING}),
}


class SubmissionInProgressError(RuntimeError):
    """Raised when a submission is requested while another one is sending."""


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def describe_delivery_error(error: WebhookDeliveryError) -> str:
    """Map a delivery failure to the message shown to the closer."""

    if not error.has_response:
        return NETWORK_ERROR_MESSAGE
    return SERVER_ERROR_TEMPLATE.format(status=error.status_code)


class SubmissionGateway:
    """Send the closing form to the webhook and track the outcome."""

    def __init__(
        self,
        form: ClosingForm,
        transport: WebhookTransport,
        *,
        history: Optional[HistoryLog] = None,
        status_reset_seconds: float = 5.0,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self.form = form
        self.transport = transport
        self.history = history if history is not None else HistoryLog()
        self.status_reset_seconds = status_reset_seconds
        self._clock = clock
        self.status: Signal[SubmissionStatus] = Signal(SubmissionStatus.IDLE, name="status")
        self.error_message: Signal[Optional[str]] = Signal(None, name="error_message")
        self._idle_timer: Optional[asyncio.TimerHandle] = None

    @property
    def can_submit(self) -> bool:
        return self.status.get() is not SubmissionStatus.SENDING

    def _transition(self, target: SubmissionStatus) -> None:
        current = self.status.get()
        if target not in ALLOWED_TRANSITIONS[current]:
            raise RuntimeError(f"Illegal submission transition {current.value} -> {target.value}")
        LOGGER.debug("Submission status %s -> %s", current.value, target.value)
        self.status.set(target)

    def _fail(self, message: str) -> SubmissionStatus:
        self._transition(SubmissionStatus.ERROR)
        self.error_message.set(message)
        return SubmissionStatus.ERROR

    def _cancel_idle_timer(self) -> None:
        if self._idle_timer is not None:
            self._idle_timer.cancel()
            self._idle_timer = None

    def _schedule_idle_timer(self) -> None:
        loop = asyncio.get_running_loop()
        self._idle_timer = loop.call_later(self.status_reset_seconds, self._return_to_idle)

    def _return_to_idle(self) -> None:
        self._idle_timer = None
        if self.status.get() is SubmissionStatus.SUCCESS:
            self._transition(SubmissionStatus.IDLE)

    async def submit(self) -> SubmissionStatus:
        """Run one submission attempt and return the resulting status."""

        if not self.can_submit:
            raise SubmissionInProgressError("A submission is already being sent")

        self._cancel_idle_timer()
        if self.status.get() is SubmissionStatus.SUCCESS:
            self._transition(SubmissionStatus.IDLE)
        self._transition(SubmissionStatus.SENDING)
        self.error_message.set(None)

        values = self.form.capture()
        if not values.closer_name or values.shift is None:
            LOGGER.warning("Submission rejected: closer name or shift missing")
            return self._fail(VALIDATION_MESSAGE)

        batch: List[LogEntry] = build_log_entries(values, self._clock())
        if not batch:
            LOGGER.warning("Submission rejected: no ledger entries for %s", values.closer_name)
            return self._fail(NOTHING_TO_SUBMIT_MESSAGE)

        try:
            await self.transport.send(batch)
        except WebhookDeliveryError as error:
            LOGGER.error(
                "Webhook delivery failed (status=%s): %s", error.status_code, error
            )
            return self._fail(describe_delivery_error(error))
        except Exception:
            LOGGER.exception("Unexpected failure while delivering %s entries", len(batch))
            return self._fail(GENERIC_ERROR_MESSAGE)

        self._transition(SubmissionStatus.SUCCESS)
        self.history.prepend(batch)
        self.form.reset()
        self._schedule_idle_timer()
        LOGGER.info(
            "Submitted %s ledger entries for %s (%s shift)",
            len(batch),
            values.closer_name,
            values.shift.value,
        )
        return SubmissionStatus.SUCCESS

    def snapshot(self) -> Dict[str, object]:
        """Export the status banner and the history for JSON responses."""

        return {
            "status": self.status.get().value,
            "error_message": self.error_message.get(),
            "can_submit": self.can_submit,
            "history": self.history.as_dicts(),
        }
