"""Mini README: Submission gateway, webhook transport and session history.

``gateway`` owns the status state machine, ``transport`` delivers batches
over HTTP, and ``history`` keeps the accepted batches newest first.
"""

from .gateway import (
    ALLOWED_TRANSITIONS,
    GENERIC_ERROR_MESSAGE,
    NETWORK_ERROR_MESSAGE,
    NOTHING_TO_SUBMIT_MESSAGE,
    SERVER_ERROR_TEMPLATE,
    VALIDATION_MESSAGE,
    SubmissionGateway,
    SubmissionInProgressError,
    SubmissionStatus,
    describe_delivery_error,
)
from .history import HistoryLog
from .transport import HttpWebhookTransport, WebhookDeliveryError, WebhookTransport

__all__ = [
    "ALLOWED_TRANSITIONS",
    "GENERIC_ERROR_MESSAGE",
    "HistoryLog",
    "HttpWebhookTransport",
    "NETWORK_ERROR_MESSAGE",
    "NOTHING_TO_SUBMIT_MESSAGE",
    "SERVER_ERROR_TEMPLATE",
    "SubmissionGateway",
    "SubmissionInProgressError",
    "SubmissionStatus",
    "VALIDATION_MESSAGE",
    "WebhookDeliveryError",
    "WebhookTransport",
    "describe_delivery_error",
]
