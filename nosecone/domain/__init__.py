"""Domain layer — pure Python, no framework dependencies."""

from nosecone.domain.backoff import retry_with_backoff
from nosecone.domain.errors import (
    ConfigError,
    InvalidPayloadError,
    ProcessingError,
    RelayError,
    WebhookError,
)
from nosecone.domain.models import (
    CommandData,
    DeliveryResult,
    DispatchOutcome,
    ErrorInfo,
    EventAuthor,
    EventChannel,
    EventGuild,
    InboundEvent,
)
from nosecone.domain.payload import (
    WebhookPayload,
    build_payload,
    build_test_payload,
    require_valid_payload,
    validate_payload,
)
from nosecone.domain.router import DeliveryRouter

__all__ = [
    "CommandData",
    "ConfigError",
    "DeliveryResult",
    "DeliveryRouter",
    "DispatchOutcome",
    "ErrorInfo",
    "EventAuthor",
    "EventChannel",
    "EventGuild",
    "InboundEvent",
    "InvalidPayloadError",
    "ProcessingError",
    "RelayError",
    "WebhookError",
    "WebhookPayload",
    "build_payload",
    "build_test_payload",
    "require_valid_payload",
    "retry_with_backoff",
    "validate_payload",
]
