"""Prefix command parsing and small formatting helpers."""

from dataclasses import dataclass
from typing import List, Optional

from nosecone.domain.models import CommandData


@dataclass
class ParsedCommand:
    command: str
    args: List[str]


def parse_command(content: str, prefix: str = "!") -> Optional[ParsedCommand]:
    """Split ``"!name arg1 arg2"`` into a lower-cased name and its args."""
    if not prefix or not content.startswith(prefix):
        return None
    parts = content[len(prefix):].split()
    if not parts:
        return None
    return ParsedCommand(command=parts[0].lower(), args=parts[1:])


def truncate_text(text: str, limit: int = 100) -> str:
    if len(text) <= limit:
        return text
    return text[: limit - 3] + "..."


def format_uptime(seconds: float) -> str:
    seconds = int(seconds)
    days, rem = divmod(seconds, 86400)
    hours, rem = divmod(rem, 3600)
    minutes, secs = divmod(rem, 60)
    parts = []
    if days:
        parts.append(f"{days}d")
    if hours:
        parts.append(f"{hours}h")
    if minutes:
        parts.append(f"{minutes}m")
    if secs:
        parts.append(f"{secs}s")
    return " ".join(parts) or "0s"


def manual_trigger_command(text: str) -> CommandData:
    """Command data for a manually triggered workflow message."""
    return CommandData(
        name="workflow",
        origin="manual",
        subcommand="trigger",
        options={"message": text},
    )
