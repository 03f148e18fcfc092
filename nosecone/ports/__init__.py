"""Port interfaces (Hexagonal Architecture)."""

from nosecone.ports.inbound import EventSink
from nosecone.ports.outbound import WebhookPort

__all__ = [
    "EventSink",
    "WebhookPort",
]
