"""Discord intake adapter (discord.py)."""

from nosecone.adapters.discord.adapter import RelayBot, event_from_interaction, event_from_message

__all__ = ["RelayBot", "event_from_interaction", "event_from_message"]
