"""Tests for DeliveryRouter — destination selection and failure handling."""

from datetime import datetime, timezone
from unittest.mock import AsyncMock

import pytest

from nosecone.domain.errors import ConfigError, InvalidPayloadError, WebhookError
from nosecone.domain.models import (
    CommandData,
    DeliveryResult,
    EventAuthor,
    EventChannel,
    EventGuild,
    InboundEvent,
)
from nosecone.domain.router import DeliveryRouter
from nosecone.ports.outbound import WebhookPort


class FakeDispatcher:
    def __init__(self, has_secondary: bool = False):
        self.has_secondary = has_secondary
        self.send_primary = AsyncMock(return_value=DeliveryResult.ok({"ok": 1}, message="primary"))
        self.send_secondary = AsyncMock(return_value=DeliveryResult.ok({"ok": 2}, message="secondary"))


def _event(guild: bool = True) -> InboundEvent:
    return InboundEvent(
        id="m1",
        content="hello",
        created_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
        author=EventAuthor(id="u1", username="alice"),
        channel=EventChannel(id="c1", name="general" if guild else None, kind="text" if guild else "dm"),
        guild=EventGuild(id="g1", name="Acme") if guild else None,
    )


COMMAND = CommandData(name="deploy", origin="slash")


def test_fake_matches_port():
    assert isinstance(FakeDispatcher(), WebhookPort)


class TestRoute:
    @pytest.mark.asyncio
    async def test_plain_message_primary_only(self):
        fake = FakeDispatcher(has_secondary=True)
        outcome = await DeliveryRouter(fake).route(_event(), "channel")
        assert outcome.primary.success is True
        assert outcome.secondary is None
        assert "secondary" not in outcome.to_dict()
        fake.send_secondary.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_command_with_secondary_goes_to_both(self):
        fake = FakeDispatcher(has_secondary=True)
        outcome = await DeliveryRouter(fake).route(_event(), "slash", COMMAND)
        assert outcome.primary.message == "primary"
        assert outcome.secondary.message == "secondary"
        primary_payload = fake.send_primary.await_args.args[0]
        secondary_payload = fake.send_secondary.await_args.args[0]
        assert primary_payload is secondary_payload
        assert primary_payload.to_wire()["command"]["name"] == "deploy"

    @pytest.mark.asyncio
    async def test_command_without_secondary_config(self):
        fake = FakeDispatcher(has_secondary=False)
        outcome = await DeliveryRouter(fake).route(_event(), "slash", COMMAND)
        assert outcome.secondary is None
        fake.send_secondary.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_primary_failure_does_not_skip_secondary(self):
        fake = FakeDispatcher(has_secondary=True)
        fake.send_primary.return_value = DeliveryResult.failed(WebhookError("down"))
        outcome = await DeliveryRouter(fake).route(_event(), "slash", COMMAND)
        assert outcome.primary.success is False
        assert outcome.primary.error.kind == "webhook_error"
        assert outcome.secondary.success is True
        assert outcome.succeeded is False

    @pytest.mark.asyncio
    async def test_secondary_failure_keeps_primary(self):
        fake = FakeDispatcher(has_secondary=True)
        fake.send_secondary.return_value = DeliveryResult.failed(ConfigError("nope"))
        outcome = await DeliveryRouter(fake).route(_event(), "slash", COMMAND)
        assert outcome.primary.success is True
        assert outcome.secondary.error.kind == "config_error"

    @pytest.mark.asyncio
    async def test_secondary_raising_is_isolated(self):
        fake = FakeDispatcher(has_secondary=True)
        fake.send_secondary.side_effect = RuntimeError("boom")
        outcome = await DeliveryRouter(fake).route(_event(), "slash", COMMAND)
        assert outcome.primary.success is True
        assert outcome.secondary.error.kind == "processing_error"
        assert "boom" in outcome.secondary.error.message

    @pytest.mark.asyncio
    async def test_dispatch_exception_becomes_processing_error(self):
        fake = FakeDispatcher()
        fake.send_primary.side_effect = InvalidPayloadError("Invalid webhook payload structure")
        outcome = await DeliveryRouter(fake).route(_event(), "channel")
        assert outcome.primary.success is False
        assert outcome.primary.error.kind == "processing_error"
        assert "Invalid webhook payload structure" in outcome.primary.error.message

    @pytest.mark.asyncio
    async def test_normalization_failure_becomes_processing_error(self):
        fake = FakeDispatcher()
        outcome = await DeliveryRouter(fake).route(_event(), "not-a-type")
        assert outcome.primary.error.kind == "processing_error"
        fake.send_primary.assert_not_awaited()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("bad_event", [None, object()])
    async def test_malformed_event_becomes_processing_error(self, bad_event):
        fake = FakeDispatcher()
        outcome = await DeliveryRouter(fake).route(bad_event, "channel")
        assert outcome.primary.success is False
        assert outcome.primary.error.kind == "processing_error"
        fake.send_primary.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_dm_payload_has_no_guild(self):
        fake = FakeDispatcher()
        await DeliveryRouter(fake).route(_event(guild=False), "dm")
        wire = fake.send_primary.await_args.args[0].to_wire()
        assert "guild" not in wire["message"]
        assert wire["message"]["channel"]["name"] == "DM"

    @pytest.mark.asyncio
    async def test_process_event_alias(self):
        fake = FakeDispatcher()
        outcome = await DeliveryRouter(fake).process_event(_event(), "channel")
        assert outcome.primary.success is True


class TestConnectivity:
    @pytest.mark.asyncio
    async def test_primary_only_even_with_secondary(self):
        fake = FakeDispatcher(has_secondary=True)
        result = await DeliveryRouter(fake).test_connectivity()
        assert result.success is True
        fake.send_secondary.assert_not_awaited()
        assert fake.send_primary.await_args.args[0].to_wire()["messageType"] == "test"

    @pytest.mark.asyncio
    async def test_exception_is_converted(self):
        fake = FakeDispatcher()
        fake.send_primary.side_effect = RuntimeError("broken")
        result = await DeliveryRouter(fake).test_webhook()
        assert result.success is False
        assert result.error.kind == "processing_error"
