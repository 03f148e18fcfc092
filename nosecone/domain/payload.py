"""Webhook payload normalization.

Builds the canonical JSON body sent to every webhook from an
``InboundEvent`` and optional ``CommandData``. Pure functions, no I/O.
"""

from collections.abc import Mapping
from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from nosecone.domain.errors import InvalidPayloadError
from nosecone.domain.models import CommandData, InboundEvent, iso_timestamp

REQUIRED_FIELDS = ("messageType", "message")
DM_CHANNEL_NAME = "DM"

MessageType = Literal["channel", "dm", "slash", "test"]


class PayloadAuthor(BaseModel):
    id: str
    username: str
    discriminator: str
    roles: List[str] = Field(default_factory=list)


class PayloadChannel(BaseModel):
    id: str
    name: str
    type: str


class PayloadGuild(BaseModel):
    id: str
    name: str


class PayloadMessage(BaseModel):
    id: str
    content: str
    timestamp: str
    author: PayloadAuthor
    channel: PayloadChannel
    guild: Optional[PayloadGuild] = None


class WebhookPayload(BaseModel):
    """Wire body: ``{messageType, message, command?}``."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    message_type: MessageType = Field(alias="messageType")
    message: PayloadMessage
    command: Optional[Dict[str, Any]] = None

    def to_wire(self) -> Dict[str, Any]:
        data = self.model_dump(by_alias=True)
        if self.message.guild is None:
            del data["message"]["guild"]
        if self.command is None:
            del data["command"]
        return data


def build_payload(
    event: InboundEvent,
    message_type: str,
    command: Optional[CommandData] = None,
) -> WebhookPayload:
    """Normalize an inbound event into a ``WebhookPayload``."""
    guild = None
    if event.guild is not None:
        guild = PayloadGuild(id=event.guild.id, name=event.guild.name)

    message = PayloadMessage(
        id=event.id,
        content=event.content,
        timestamp=iso_timestamp(event.created_at),
        author=PayloadAuthor(
            id=event.author.id,
            username=event.author.username,
            discriminator=event.author.discriminator,
            roles=list(event.author.role_ids),
        ),
        channel=PayloadChannel(
            id=event.channel.id,
            name=event.channel.name or DM_CHANNEL_NAME,
            type=event.channel.kind,
        ),
        guild=guild,
    )
    return WebhookPayload(
        message_type=message_type,
        message=message,
        command=command.to_dict() if command is not None else None,
    )


def build_test_payload() -> WebhookPayload:
    """Synthetic payload used to check webhook connectivity."""
    return WebhookPayload(
        message_type="test",
        message=PayloadMessage(
            id="test-message-id",
            content="NoseCone webhook connectivity test",
            timestamp=iso_timestamp(),
            author=PayloadAuthor(
                id="test-user-id",
                username="NoseCone",
                discriminator="0000",
                roles=[],
            ),
            channel=PayloadChannel(
                id="test-channel-id",
                name="test-channel",
                type="GUILD_TEXT",
            ),
        ),
    )


def validate_payload(payload: Any) -> bool:
    if isinstance(payload, WebhookPayload):
        return True
    if not isinstance(payload, Mapping):
        return False
    return all(key in payload for key in REQUIRED_FIELDS)


def require_valid_payload(payload: Union[WebhookPayload, Mapping]) -> Dict[str, Any]:
    """Return the JSON body for ``payload`` or raise ``InvalidPayloadError``."""
    if not validate_payload(payload):
        raise InvalidPayloadError("Invalid webhook payload structure")
    if isinstance(payload, WebhookPayload):
        return payload.to_wire()
    return dict(payload)
