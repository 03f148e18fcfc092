"""NoseCone — relays Discord messages and commands to n8n webhooks."""

from nosecone.config import AppConfig, ConfigValidationError, __version__
from nosecone.domain import (
    CommandData,
    DeliveryResult,
    DeliveryRouter,
    DispatchOutcome,
    EventAuthor,
    EventChannel,
    EventGuild,
    InboundEvent,
    WebhookPayload,
    build_payload,
    retry_with_backoff,
)
from nosecone.adapters.webhook import WebhookDispatcher

__all__ = [
    "__version__",
    "AppConfig",
    "CommandData",
    "ConfigValidationError",
    "DeliveryResult",
    "DeliveryRouter",
    "DispatchOutcome",
    "EventAuthor",
    "EventChannel",
    "EventGuild",
    "InboundEvent",
    "WebhookDispatcher",
    "WebhookPayload",
    "build_payload",
    "retry_with_backoff",
]
