"""Mini README: Tests for the httpx webhook transport.

Structure:
    * test_batch_is_posted_as_json_array - the batch is posted once as a JSON array with webhook field names.
    * test_error_status_is_reported_with_code - a non-success response raises with its status code.
    * test_connection_failure_has_no_status - a connection failure raises without a status code.
    * test_missing_url_fails_before_any_request - without a URL the transport fails before sending anything.
"""

from __future__ import annotations

import asyncio
import json
from typing import List

import httpx
import pytest

from shiftclose.ledger import LogEntry, Shift
from shiftclose.submission import HttpWebhookTransport, WebhookDeliveryError

BATCH = [
    LogEntry(
        day="2024-06-01T22:30:00.000Z",
        closer_name="Ana",
        shift=Shift.MORNING,
        accounting_imputation="Gastos Operativos",
        account_entry="Gasto: ice",
        amount=-15.0,
    )
]


def test_batch_is_posted_as_json_array() -> None:
    """The batch is posted once as a JSON array with webhook field names."""

    received: List[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        received.append(request)
        return httpx.Response(200, json={"ok": True})

    transport = HttpWebhookTransport(
        "https://hooks.example.test/closing", transport=httpx.MockTransport(handler)
    )

    asyncio.run(transport.send(BATCH))

    assert len(received) == 1
    assert received[0].method == "POST"
    assert str(received[0].url) == "https://hooks.example.test/closing"
    assert json.loads(received[0].content) == [
        {
            "day": "2024-06-01T22:30:00.000Z",
            "closerName": "Ana",
            "shift": "mañana",
            "accountingImputation": "Gastos Operativos",
            "accountEntry": "Gasto: ice",
            "amount": -15.0,
        }
    ]


def test_error_status_is_reported_with_code() -> None:
    """A non-success response raises with its status code."""

    transport = HttpWebhookTransport(
        "https://hooks.example.test/closing",
        transport=httpx.MockTransport(lambda request: httpx.Response(502)),
    )

    with pytest.raises(WebhookDeliveryError) as excinfo:
        asyncio.run(transport.send(BATCH))

    assert excinfo.value.status_code == 502
    assert excinfo.value.has_response


def test_connection_failure_has_no_status() -> None:
    """A connection failure raises without a status code."""

    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    transport = HttpWebhookTransport(
        "https://hooks.example.test/closing", transport=httpx.MockTransport(handler)
    )

    with pytest.raises(WebhookDeliveryError) as excinfo:
        asyncio.run(transport.send(BATCH))

    assert excinfo.value.status_code is None
    assert not excinfo.value.has_response


def test_missing_url_fails_before_any_request() -> None:
    """Without a URL the transport fails before sending anything."""

    calls: List[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(200)

    transport = HttpWebhookTransport(None, transport=httpx.MockTransport(handler))

    with pytest.raises(WebhookDeliveryError) as excinfo:
        asyncio.run(transport.send(BATCH))

    assert excinfo.value.status_code is None
    assert calls == []
