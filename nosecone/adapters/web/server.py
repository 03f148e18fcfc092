"""FastAPI application — status, connectivity test and manual trigger."""

import time
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field

from nosecone.config import AppConfig, __version__
from nosecone.domain.commands import format_uptime, manual_trigger_command
from nosecone.domain.models import EventAuthor, EventChannel, InboundEvent
from nosecone.domain.validators import sanitize_input
from nosecone.infrastructure import log
from nosecone.ports.inbound import EventSink


class TriggerRequest(BaseModel):
    message: str = Field(min_length=1)
    author: Optional[str] = None


class StatusResponse(BaseModel):
    version: str
    uptime: str
    primaryConfigured: bool
    secondaryConfigured: bool
    debugMode: bool
    commandChannel: Optional[str] = None


def manual_event(text: str, author: Optional[str] = None) -> InboundEvent:
    """Message-like event for triggers that do not come from Discord."""
    now = datetime.now(timezone.utc)
    username = author or "http"
    return InboundEvent(
        id=f"manual-trigger-{int(now.timestamp() * 1000)}",
        content=text,
        created_at=now,
        author=EventAuthor(id=f"http-{username}", username=username),
        channel=EventChannel(id="http", name="http", kind="http"),
    )


def create_app(sink: EventSink, config: AppConfig) -> FastAPI:
    app = FastAPI(title="NoseCone Relay", version=__version__)
    started_at = time.monotonic()

    @app.get("/status", response_model=StatusResponse)
    async def status():
        """Relay configuration summary"""
        return StatusResponse(
            version=__version__,
            uptime=format_uptime(time.monotonic() - started_at),
            primaryConfigured=bool(config.webhook.url),
            secondaryConfigured=config.webhook.has_secondary,
            debugMode=config.bot.debug_mode,
            commandChannel=config.bot.command_channel_id or None,
        )

    @app.post("/test")
    async def test_connectivity() -> Dict[str, Any]:
        """Send the connectivity test payload to the primary webhook"""
        result = await sink.test_connectivity()
        return result.to_dict()

    @app.post("/trigger")
    async def trigger(req: TriggerRequest) -> Dict[str, Any]:
        """Relay a manual workflow message"""
        text = sanitize_input(req.message)
        if not text:
            raise HTTPException(status_code=422, detail="message is empty after sanitization")
        log.info(f"Manual workflow trigger over HTTP (author={req.author or 'http'})")
        outcome = await sink.process_event(
            manual_event(text, req.author), "slash", manual_trigger_command(text),
        )
        return outcome.to_dict()

    return app
