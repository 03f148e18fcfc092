"""Outbound ports — interfaces for external system adapters."""

from typing import Any, Mapping, Protocol, Union, runtime_checkable

from nosecone.domain.models import DeliveryResult


@runtime_checkable
class WebhookPort(Protocol):
    """Interface for webhook delivery backends."""

    @property
    def has_secondary(self) -> bool: ...

    async def send_primary(self, payload: Union[Any, Mapping]) -> DeliveryResult: ...

    async def send_secondary(self, payload: Union[Any, Mapping]) -> DeliveryResult: ...
