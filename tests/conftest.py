"""Mini README: Shared fakes for submission and web tests.

Structure:
    * RecordingTransport - in-memory webhook capturing every batch it receives.
"""

from __future__ import annotations

from typing import List, Optional, Sequence

import pytest

from shiftclose.ledger import LogEntry
from shiftclose.submission import WebhookDeliveryError


class RecordingTransport:
    """Webhook stand-in that records batches and can be told to fail."""

    def __init__(self, failure: Optional[WebhookDeliveryError] = None) -> None:
        self.batches: List[List[LogEntry]] = []
        self.failure = failure

    async def send(self, batch: Sequence[LogEntry]) -> None:
        self.batches.append(list(batch))
        if self.failure is not None:
            raise self.failure


@pytest.fixture
def transport() -> RecordingTransport:
    return RecordingTransport()
