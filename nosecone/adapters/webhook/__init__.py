"""Webhook delivery adapter (aiohttp)."""

from nosecone.adapters.webhook.dispatcher import WebhookDispatcher

__all__ = ["WebhookDispatcher"]
