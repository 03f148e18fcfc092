"""Delivery router — decides which webhooks receive an event.

The primary webhook always gets the payload. The secondary webhook only
gets it when the event carries command data and a secondary URL is
configured. Both deliveries run concurrently and independently.
"""

import asyncio
from typing import Optional

from nosecone.domain.errors import ProcessingError
from nosecone.domain.models import CommandData, DeliveryResult, DispatchOutcome, InboundEvent
from nosecone.domain.payload import build_payload, build_test_payload
from nosecone.infrastructure import log
from nosecone.ports.outbound import WebhookPort


class DeliveryRouter:
    """Routes normalized payloads to the configured webhooks.

    Never raises: any failure becomes a ``processing_error`` result.
    """

    def __init__(self, dispatcher: WebhookPort):
        self._dispatcher = dispatcher

    @property
    def has_secondary(self) -> bool:
        return self._dispatcher.has_secondary

    async def route(
        self,
        event: InboundEvent,
        message_type: str,
        command: Optional[CommandData] = None,
    ) -> DispatchOutcome:
        try:
            payload = build_payload(event, message_type, command)

            if command is None or not self._dispatcher.has_secondary:
                return DispatchOutcome(primary=await self._dispatcher.send_primary(payload))

            primary, secondary = await asyncio.gather(
                self._dispatcher.send_primary(payload),
                self._dispatcher.send_secondary(payload),
                return_exceptions=True,
            )
            return DispatchOutcome(
                primary=_as_result(primary),
                secondary=_as_result(secondary),
            )
        except Exception as e:
            log.error(f"Error processing event {getattr(event, 'id', '?')} for webhooks: {e}")
            return DispatchOutcome(
                primary=DeliveryResult.failed(ProcessingError(f"Message processing failed: {e}")),
            )

    async def test_webhook(self) -> DeliveryResult:
        """Send a synthetic ``test`` payload to the primary webhook only."""
        log.info("Testing webhook connectivity...")
        try:
            return await self._dispatcher.send_primary(build_test_payload())
        except Exception as e:
            log.error(f"Webhook connectivity test failed: {e}")
            return DeliveryResult.failed(ProcessingError(f"Connectivity test failed: {e}"))

    # Entry points used by the platform adapters
    process_event = route
    test_connectivity = test_webhook


def _as_result(value) -> DeliveryResult:
    if isinstance(value, DeliveryResult):
        return value
    log.error(f"Webhook delivery raised: {value}")
    return DeliveryResult.failed(ProcessingError(f"Message processing failed: {value}"))
