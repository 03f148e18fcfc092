"""Domain data models — pure Python dataclasses."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Tuple

from nosecone.domain.errors import RelayError

MAX_CONTENT_LENGTH = 2000  # Discord message limit

MESSAGE_TYPES = ("channel", "dm", "slash", "test")
COMMAND_ORIGINS = ("slash", "manual", "prefix")


def iso_timestamp(value: Optional[datetime] = None) -> str:
    """UTC ISO-8601 with millisecond precision and a ``Z`` suffix."""
    value = value or datetime.now(timezone.utc)
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


@dataclass(frozen=True)
class EventAuthor:
    id: str
    username: str
    discriminator: str = "0"
    role_ids: Tuple[str, ...] = ()


@dataclass(frozen=True)
class EventChannel:
    id: str
    name: Optional[str] = None  # None for DM channels
    kind: str = "text"


@dataclass(frozen=True)
class EventGuild:
    id: str
    name: str


@dataclass(frozen=True)
class InboundEvent:
    """Platform-agnostic message or command invocation."""

    id: str
    content: str
    created_at: datetime
    author: EventAuthor
    channel: EventChannel
    guild: Optional[EventGuild] = None

    @property
    def is_direct(self) -> bool:
        return self.guild is None


@dataclass(frozen=True)
class CommandData:
    """Structured command invocation attached to an event."""

    name: str
    origin: str  # "slash" | "manual" | "prefix"
    subcommand: Optional[str] = None
    options: Dict[str, Any] = field(default_factory=dict)
    args: List[str] = field(default_factory=list)
    prefix: Optional[str] = None

    def __post_init__(self):
        if self.origin not in COMMAND_ORIGINS:
            raise ValueError(f"unknown command origin: {self.origin!r}")

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "name": self.name,
            "type": self.origin,
            "options": dict(self.options),
        }
        if self.subcommand:
            data["subcommand"] = self.subcommand
        if self.args:
            data["args"] = list(self.args)
        if self.prefix is not None:
            data["prefix"] = self.prefix
        return data


@dataclass(frozen=True)
class ErrorInfo:
    kind: str
    message: str
    timestamp: str

    def to_dict(self) -> Dict[str, str]:
        return {"kind": self.kind, "message": self.message, "timestamp": self.timestamp}


@dataclass(frozen=True)
class DeliveryResult:
    """Outcome of delivering one payload to one destination."""

    success: bool
    data: Any = None
    message: Optional[str] = None
    error: Optional[ErrorInfo] = None
    timestamp: str = field(default_factory=iso_timestamp)

    @classmethod
    def ok(cls, data: Any = None, message: str = "Success") -> "DeliveryResult":
        return cls(success=True, data=data, message=message)

    @classmethod
    def failed(cls, error: RelayError) -> "DeliveryResult":
        ts = iso_timestamp()
        return cls(
            success=False,
            error=ErrorInfo(kind=error.kind, message=str(error), timestamp=ts),
            timestamp=ts,
        )

    def to_dict(self) -> Dict[str, Any]:
        if self.success:
            return {
                "success": True,
                "message": self.message,
                "data": self.data,
                "timestamp": self.timestamp,
            }
        return {"success": False, "error": self.error.to_dict()}


@dataclass(frozen=True)
class DispatchOutcome:
    """Per-destination results for one inbound event."""

    primary: DeliveryResult
    secondary: Optional[DeliveryResult] = None

    @property
    def succeeded(self) -> bool:
        return self.primary.success

    def to_dict(self) -> Dict[str, Any]:
        data = {"primary": self.primary.to_dict()}
        if self.secondary is not None:
            data["secondary"] = self.secondary.to_dict()
        return data
