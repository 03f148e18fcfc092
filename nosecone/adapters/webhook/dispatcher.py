"""Webhook dispatcher — posts payloads to n8n webhooks using aiohttp."""

import json
from typing import Any, Dict, Mapping, Optional, Union

import aiohttp

from nosecone.config import WebhookConfig, __version__
from nosecone.domain.backoff import retry_with_backoff
from nosecone.domain.commands import truncate_text
from nosecone.domain.errors import ConfigError, InvalidPayloadError, WebhookError
from nosecone.domain.models import DeliveryResult
from nosecone.domain.payload import WebhookPayload, require_valid_payload
from nosecone.infrastructure import log

USER_AGENT = f"NoseCone-Relay/{__version__}"


def _decode_body(text: str) -> Any:
    if not text:
        return None
    try:
        return json.loads(text)
    except ValueError:
        return text


class WebhookDispatcher:
    """Async webhook client with bearer auth and retry/backoff.

    One ``aiohttp.ClientSession`` is shared by every delivery; call
    ``close()`` on shutdown.
    """

    def __init__(self, config: WebhookConfig):
        self._config = config
        self._session: Optional[aiohttp.ClientSession] = None

    @property
    def is_configured(self) -> bool:
        return bool(self._config.url)

    @property
    def has_secondary(self) -> bool:
        return self._config.has_secondary

    def _headers(self) -> Dict[str, str]:
        headers = {
            "Content-Type": "application/json",
            "User-Agent": USER_AGENT,
        }
        if self._config.token:
            headers["Authorization"] = f"Bearer {self._config.token}"
        return headers

    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                headers=self._headers(),
                timeout=aiohttp.ClientTimeout(total=self._config.timeout_seconds),
            )
        return self._session

    async def close(self):
        if self._session is not None and not self._session.closed:
            await self._session.close()
        self._session = None

    async def _post_once(self, url: str, data: bytes) -> Any:
        session = self._get_session()
        async with session.post(url, data=data) as resp:
            text = await resp.text()
            if resp.status >= 400:
                raise WebhookError(
                    f"HTTP {resp.status}: {truncate_text(text, 200)}",
                    status=resp.status,
                )
            log.debug(f"webhook response received: status={resp.status} url={url}")
            return _decode_body(text)

    async def send(
        self,
        url: str,
        payload: Union[WebhookPayload, Mapping],
        label: str = "webhook",
    ) -> DeliveryResult:
        """POST ``payload`` to ``url``.

        Raises ``InvalidPayloadError`` before any network call if the payload
        lacks ``messageType`` or ``message``, or cannot be encoded as JSON.
        Network and HTTP failures are retried, then returned as a
        ``webhook_error`` result.
        """
        body = require_valid_payload(payload)
        message_id = body["message"].get("id") if isinstance(body["message"], Mapping) else None
        try:
            encoded = json.dumps(body, ensure_ascii=False)
        except (TypeError, ValueError) as e:
            raise InvalidPayloadError(f"Payload is not JSON serializable: {e}") from e
        log.debug(f"Sending payload to {label}: {encoded}")

        raw = encoded.encode("utf-8")
        try:
            data = await retry_with_backoff(
                lambda: self._post_once(url, raw),
                max_retries=self._config.max_retries,
                base_delay=self._config.base_delay,
            )
        except Exception as e:
            log.error(f"Failed to send data to {label}: {e}")
            return DeliveryResult.failed(WebhookError(f"Failed to send data to {label}: {e}"))

        log.info(f"Successfully sent data to {label} (message_id={message_id})")
        return DeliveryResult.ok(data, message=f"Data sent to {label}")

    async def send_primary(self, payload: Union[WebhookPayload, Mapping]) -> DeliveryResult:
        return await self.send(self._config.url, payload, label="primary webhook")

    async def send_secondary(self, payload: Union[WebhookPayload, Mapping]) -> DeliveryResult:
        if not self._config.secondary_url:
            return DeliveryResult.failed(ConfigError("Secondary webhook URL not configured"))
        return await self.send(self._config.secondary_url, payload, label="secondary webhook")
