"""Discord adapter — converts discord.py events into relay calls.

``RelayBot`` listens for messages and application-command interactions,
turns them into ``InboundEvent`` values and hands them to an ``EventSink``
(normally ``DeliveryRouter``). It never talks to webhooks itself.
"""

import time
from dataclasses import replace
from typing import Any, Dict, List, Optional, Tuple

import discord

from nosecone.adapters.discord import replies
from nosecone.config import AppConfig
from nosecone.domain.commands import format_uptime, manual_trigger_command, parse_command
from nosecone.domain.models import (
    MAX_CONTENT_LENGTH,
    CommandData,
    DispatchOutcome,
    EventAuthor,
    EventChannel,
    EventGuild,
    InboundEvent,
)
from nosecone.domain.validators import sanitize_input
from nosecone.infrastructure import log
from nosecone.ports.inbound import EventSink

BUILTIN_COMMANDS = ("help", "workflow")

# Application command option types
_SUB_COMMAND = 1
_SUB_COMMAND_GROUP = 2


def _author(user: Any, guild: Any) -> EventAuthor:
    role_ids: Tuple[str, ...] = ()
    if guild is not None:
        role_ids = tuple(str(role.id) for role in (getattr(user, "roles", None) or ()))
    return EventAuthor(
        id=str(user.id),
        username=user.name,
        discriminator=str(getattr(user, "discriminator", None) or "0"),
        role_ids=role_ids,
    )


def _guild(guild: Any) -> Optional[EventGuild]:
    if guild is None:
        return None
    return EventGuild(id=str(guild.id), name=guild.name)


def event_from_message(message: discord.Message) -> InboundEvent:
    """Convert a Discord message into an ``InboundEvent``."""
    channel = message.channel
    return InboundEvent(
        id=str(message.id),
        content=message.content[:MAX_CONTENT_LENGTH],
        created_at=message.created_at,
        author=_author(message.author, message.guild),
        channel=EventChannel(
            id=str(channel.id),
            name=getattr(channel, "name", None),
            kind=str(channel.type),
        ),
        guild=_guild(message.guild),
    )


def flatten_options(options: List[Dict[str, Any]]) -> Tuple[Optional[str], Dict[str, Any]]:
    """Return ``(subcommand, {option: value})`` from raw interaction options.

    Nested subcommand groups are joined with a space, e.g. ``"admin reset"``.
    """
    values: Dict[str, Any] = {}
    for opt in options or []:
        if opt.get("type") in (_SUB_COMMAND, _SUB_COMMAND_GROUP):
            sub, nested = flatten_options(opt.get("options", []))
            name = opt["name"] if sub is None else f"{opt['name']} {sub}"
            return name, nested
        values[opt["name"]] = opt.get("value")
    return None, values


def event_from_interaction(
    interaction: discord.Interaction,
    name: str,
    subcommand: Optional[str],
    options: Dict[str, Any],
) -> InboundEvent:
    """Convert a slash-command interaction into a message-like ``InboundEvent``."""
    parts = [f"/{name}"]
    if subcommand:
        parts.append(subcommand)
    parts.extend(f"{key}:{value}" for key, value in options.items())

    channel = interaction.channel
    if channel is not None:
        event_channel = EventChannel(
            id=str(channel.id),
            name=getattr(channel, "name", None),
            kind=str(channel.type),
        )
    else:
        event_channel = EventChannel(id=str(interaction.channel_id), name=None, kind="unknown")

    return InboundEvent(
        id=str(interaction.id),
        content=" ".join(parts)[:MAX_CONTENT_LENGTH],
        created_at=interaction.created_at,
        author=_author(interaction.user, interaction.guild),
        channel=event_channel,
        guild=_guild(interaction.guild),
    )


def _log_outcome(label: str, outcome: DispatchOutcome):
    if outcome.primary.success:
        log.info(f"{label} successfully sent to primary webhook")
    else:
        log.warn(f"Failed to send {label.lower()} to primary webhook: {outcome.primary.error.message}")
    if outcome.secondary is not None:
        if outcome.secondary.success:
            log.info(f"{label} successfully sent to secondary webhook")
        else:
            log.warn(f"Failed to send {label.lower()} to secondary webhook: {outcome.secondary.error.message}")


class RelayBot(discord.Client):
    """Discord client that forwards messages and slash commands to webhooks.

    - DMs: always forwarded
    - Guild channels: forwarded from the command channel, or from every
      channel when none is configured
    - ``!help`` / ``!workflow ...``: handled locally after forwarding
    """

    def __init__(self, sink: EventSink, config: AppConfig, **discord_kwargs):
        intents = discord.Intents.default()
        intents.message_content = True
        super().__init__(intents=intents, **discord_kwargs)
        self._sink = sink
        self._bot_config = config.bot
        self._started_at = time.monotonic()

    @property
    def prefix(self) -> str:
        return self._bot_config.prefix

    async def on_ready(self):
        log.info(f"NoseCone bot is ready! Logged in as {self.user}")
        log.info(f"Connected to {len(self.guilds)} guilds")
        for guild in self.guilds:
            log.debug(f"Connected to guild: {guild.name} ({guild.id})")
        await self.change_presence(
            activity=discord.Activity(type=discord.ActivityType.watching, name="n8n workflows"),
        )

    def message_type_for(self, message: discord.Message) -> Optional[str]:
        """``"dm"``, ``"channel"`` or None when the message should be ignored."""
        if message.guild is None:
            return "dm"
        channel_id = self._bot_config.command_channel_id
        if not channel_id or str(message.channel.id) == channel_id:
            return "channel"
        return None

    async def on_message(self, message: discord.Message):
        if message.author.bot:
            return
        if self.user and message.author == self.user:
            return

        message_type = self.message_type_for(message)
        if message_type is None:
            return

        is_dm = message_type == "dm"
        try:
            parsed = parse_command(message.content, self.prefix)
            command = None
            if parsed:
                command = CommandData(
                    name=parsed.command,
                    origin="prefix",
                    args=parsed.args,
                    prefix=self.prefix,
                )
                log.debug(f"Parsed command from message: {command.to_dict()}")

            event = event_from_message(message)
            log.info(f"Processing {message_type} message from {event.author.username}")
            outcome = await self._sink.process_event(event, message_type, command)
            _log_outcome("Message", outcome)

            if self._bot_config.debug_mode and not is_dm:
                await self._safe_reply(message, replies.ack_text(outcome))

            if parsed and parsed.command in BUILTIN_COMMANDS:
                subcommand = parsed.args[0].lower() if parsed.args else None
                text = " ".join(parsed.args[1:])
                reply = await self.builtin_reply(parsed.command, subcommand, text, event)
                if reply:
                    await self._safe_reply(message, reply)

        except Exception as e:
            log.error(f"Error processing message: {e}")
            if self._bot_config.debug_mode and not is_dm:
                await self._safe_reply(message, "❌ Error processing message for webhook")

    async def on_interaction(self, interaction: discord.Interaction):
        if interaction.type != discord.InteractionType.application_command:
            return

        data = interaction.data or {}
        name = data.get("name", "")
        subcommand, options = flatten_options(data.get("options", []))
        log.info(f"Executing slash command: {name} by {interaction.user.name}")

        try:
            await interaction.response.defer(ephemeral=True)
            event = event_from_interaction(interaction, name, subcommand, options)
            command = CommandData(name=name, origin="slash", subcommand=subcommand, options=options)
            outcome = await self._sink.process_event(event, "slash", command)
            _log_outcome("Slash command data", outcome)

            reply = None
            if name in BUILTIN_COMMANDS:
                text = str(options.get("message") or "")
                reply = await self.builtin_reply(name, subcommand, text, event)
            await interaction.followup.send(reply or replies.ack_text(outcome), ephemeral=True)

        except Exception as e:
            log.error(f"Error executing slash command {name}: {e}")
            try:
                await interaction.followup.send(
                    "There was an error while executing this command!", ephemeral=True,
                )
            except discord.HTTPException as reply_error:
                log.error(f"Failed to send error response for slash command: {reply_error}")

    async def builtin_reply(
        self,
        name: str,
        subcommand: Optional[str],
        text: str,
        event: InboundEvent,
    ) -> Optional[str]:
        """Run a built-in command and return the reply text."""
        if name == "help":
            return replies.help_text(self.prefix)
        if name != "workflow":
            return None

        if subcommand == "test":
            log.info(f"Webhook connectivity test requested by {event.author.username}")
            return replies.connectivity_reply(await self._sink.test_connectivity())

        if subcommand == "trigger":
            text = sanitize_input(text)
            if not text:
                return replies.workflow_usage(self.prefix)
            log.info(f"Manual workflow trigger requested by {event.author.username}")
            manual = replace(
                event,
                id=f"manual-trigger-{int(time.time() * 1000)}",
                content=text,
            )
            outcome = await self._sink.process_event(manual, "slash", manual_trigger_command(text))
            _log_outcome("Manual trigger", outcome)
            return replies.trigger_reply(outcome, text)

        if subcommand == "status":
            connectivity = await self._sink.test_connectivity()
            return replies.status_reply(
                uptime=format_uptime(time.monotonic() - self._started_at),
                guild_count=len(self.guilds),
                connectivity=connectivity,
                has_secondary=self._sink.has_secondary,
                prefix=self.prefix,
                debug_mode=self._bot_config.debug_mode,
                command_channel_id=self._bot_config.command_channel_id,
            )

        return replies.workflow_usage(self.prefix)

    async def _safe_reply(self, message: discord.Message, text: str):
        try:
            await message.reply(text[:MAX_CONTENT_LENGTH])
        except discord.HTTPException as e:
            log.error(f"Failed to send response: {e}")
