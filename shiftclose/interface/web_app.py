"""Mini README: FastAPI-powered closing form for the shift close service.

Structure:
    * create_application - application factory wiring routes and templates.
    * Form, gateway and history - one in-memory instance per application.

The page posts each keystroke or button press to a small route that calls
the matching form handler and answers with the full state snapshot, so the
browser only ever renders what the server derived. ``POST /submit`` runs
the submission gateway against the configured webhook.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable, Dict, Optional

from fastapi import FastAPI, Form, HTTPException, Request
from fastapi.responses import HTMLResponse, JSONResponse
from fastapi.templating import Jinja2Templates

from ..configuration import ShiftCloseSettings, get_settings
from ..form import ClosingForm
from ..ledger import Shift
from ..logging_utils import get_logger
from ..submission import (
    HttpWebhookTransport,
    SubmissionGateway,
    SubmissionInProgressError,
    WebhookTransport,
)

LOGGER = get_logger(__name__)


def create_application(
    settings: Optional[ShiftCloseSettings] = None,
    transport: Optional[WebhookTransport] = None,
) -> FastAPI:
    """Create the FastAPI application with routes and dependencies."""

    settings = settings or get_settings()
    app = FastAPI(title="Shift Close", version="0.1.0")
    templates = Jinja2Templates(directory=str(Path(__file__).parent / "templates"))

    form = ClosingForm()
    if transport is None:
        transport = HttpWebhookTransport(
            settings.webhook_url, timeout_seconds=settings.webhook_timeout_seconds
        )
    gateway = SubmissionGateway(
        form, transport, status_reset_seconds=settings.status_reset_seconds
    )
    app.state.form = form
    app.state.gateway = gateway
    if not settings.webhook_url:
        LOGGER.warning("SHIFTCLOSE_WEBHOOK_URL is not set; submissions will fail")

    scalar_setters: Dict[str, Callable[[object], None]] = {
        "closer_name": form.set_closer_name,
        "shift": form.set_shift,
        "first_data_income": form.set_first_data_income,
        "pedidos_ya_income": form.set_pedidos_ya_income,
        "mercado_pago_income": form.set_mercado_pago_income,
        "daily_summary": form.set_daily_summary,
    }

    def state_payload() -> Dict[str, Any]:
        return {"form": form.snapshot(), **gateway.snapshot()}

    def apply(handler: Callable[[], None]) -> JSONResponse:
        try:
            handler()
        except IndexError as error:
            raise HTTPException(status_code=404, detail=str(error)) from error
        except ValueError as error:
            raise HTTPException(status_code=400, detail=str(error)) from error
        return JSONResponse(state_payload())

    @app.get("/", response_class=HTMLResponse)
    async def closing_page(request: Request) -> HTMLResponse:
        """Render the closing form with the current state."""

        return templates.TemplateResponse(
            request,
            "closing.html",
            {
                "state": state_payload(),
                "shifts": [shift.value for shift in Shift],
                "status_reset_ms": int(settings.status_reset_seconds * 1000),
            },
        )

    @app.get("/state")
    async def current_state() -> JSONResponse:
        """Return form inputs, totals, status and history."""

        return JSONResponse(state_payload())

    @app.post("/fields/{name}")
    async def set_field(name: str, value: str = Form("")) -> JSONResponse:
        """Update one scalar input."""

        setter = scalar_setters.get(name)
        if setter is None:
            raise HTTPException(status_code=404, detail=f"Unknown field '{name}'")
        LOGGER.debug("Field %s updated", name)
        return apply(lambda: setter(value))

    @app.post("/cash-entries")
    async def add_cash_entry() -> JSONResponse:
        return apply(form.add_cash_entry)

    @app.delete("/cash-entries/{index}")
    async def remove_cash_entry(index: int) -> JSONResponse:
        return apply(lambda: form.remove_cash_entry(index))

    @app.post("/cash-entries/{index}/{field}")
    async def update_cash_entry(index: int, field: str, value: str = Form("")) -> JSONResponse:
        return apply(lambda: form.update_cash_entry(index, field, value))

    @app.post("/expenses")
    async def add_expense() -> JSONResponse:
        return apply(form.add_expense)

    @app.delete("/expenses/{index}")
    async def remove_expense(index: int) -> JSONResponse:
        return apply(lambda: form.remove_expense(index))

    @app.post("/expenses/{index}/detail")
    async def set_expense_detail(index: int, value: str = Form("")) -> JSONResponse:
        return apply(lambda: form.set_expense_detail(index, value))

    @app.post("/expenses/{index}/amount")
    async def set_expense_amount(index: int, value: str = Form("")) -> JSONResponse:
        return apply(lambda: form.set_expense_amount(index, value))

    @app.post("/submit")
    async def submit() -> JSONResponse:
        """Send the closing to the webhook and report the outcome."""

        try:
            status = await gateway.submit()
        except SubmissionInProgressError as error:
            raise HTTPException(status_code=409, detail=str(error)) from error
        LOGGER.info("Submission finished with status %s", status.value)
        return JSONResponse(state_payload())

    return app
