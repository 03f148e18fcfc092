"""Relay error taxonomy.

Each error carries a ``kind`` tag that ends up in ``DeliveryResult.error``.
"""

from typing import Optional


class RelayError(Exception):
    """Base class for failures that are reported as tagged results."""

    kind = "error"


class InvalidPayloadError(RelayError):
    """Payload is missing ``messageType`` or ``message``. Never sent, never retried."""

    kind = "invalid_payload"


class ConfigError(RelayError):
    """A destination was requested that is not configured."""

    kind = "config_error"


class WebhookError(RelayError):
    """Network or HTTP failure talking to a webhook."""

    kind = "webhook_error"

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.status = status


class ProcessingError(RelayError):
    """Unexpected failure while routing an event."""

    kind = "processing_error"
