"""Inbound port — what platform adapters call into."""

from typing import Optional, Protocol, runtime_checkable

from nosecone.domain.models import CommandData, DeliveryResult, DispatchOutcome, InboundEvent


@runtime_checkable
class EventSink(Protocol):
    """Accepts normalized events from Discord, HTTP or CLI adapters."""

    @property
    def has_secondary(self) -> bool: ...

    async def process_event(
        self,
        event: InboundEvent,
        message_type: str,
        command: Optional[CommandData] = None,
    ) -> DispatchOutcome: ...

    async def test_connectivity(self) -> DeliveryResult: ...
