"""Configuration — read once from the environment, immutable afterwards."""

__version__ = "0.1.0"

import os
from dataclasses import dataclass, field
from typing import List

from dotenv import load_dotenv

from nosecone.domain.validators import validate_bot_token, validate_snowflake, validate_url

load_dotenv()

_TRUTHY = ("1", "true", "yes", "on")


def _parse_port(raw: str) -> int:
    """-1 for non-numeric values so validate() can report them."""
    try:
        return int(raw.strip() or "0")
    except ValueError:
        return -1


class ConfigValidationError(Exception):
    """Raised at startup when required configuration is missing or invalid."""

    def __init__(self, errors: List[str]):
        self.errors = list(errors)
        super().__init__("Configuration validation failed:\n" + "\n".join(self.errors))


@dataclass(frozen=True)
class WebhookConfig:
    url: str = ""
    token: str = ""
    secondary_url: str = ""
    timeout_seconds: float = 10.0
    max_retries: int = 3
    base_delay: float = 1.0

    @property
    def has_secondary(self) -> bool:
        return bool(self.secondary_url)


@dataclass(frozen=True)
class DiscordConfig:
    bot_token: str = ""
    client_id: str = ""


@dataclass(frozen=True)
class BotConfig:
    prefix: str = "!"
    command_channel_id: str = ""
    debug_mode: bool = False


@dataclass(frozen=True)
class AppConfig:
    """Typed application configuration."""

    webhook: WebhookConfig = field(default_factory=WebhookConfig)
    discord: DiscordConfig = field(default_factory=DiscordConfig)
    bot: BotConfig = field(default_factory=BotConfig)
    log_file: str = "logs/app.log"
    http_port: int = 0

    @classmethod
    def from_env(cls) -> "AppConfig":
        """Create AppConfig from environment variables."""
        return cls(
            webhook=WebhookConfig(
                url=os.getenv("N8N_WEBHOOK_URL", "").strip(),
                token=os.getenv("N8N_WEBHOOK_TOKEN", "").strip(),
                secondary_url=os.getenv("N8N_SECONDARY_WEBHOOK", "").strip(),
            ),
            discord=DiscordConfig(
                bot_token=os.getenv("DISCORD_BOT_TOKEN", "").strip(),
                client_id=os.getenv("DISCORD_CLIENT_ID", "").strip(),
            ),
            bot=BotConfig(
                prefix=os.getenv("BOT_PREFIX", "!").strip() or "!",
                command_channel_id=os.getenv("COMMAND_CHANNEL_ID", "").strip(),
                debug_mode=os.getenv("DEBUG_MODE", "false").strip().lower() in _TRUTHY,
            ),
            log_file=os.getenv("LOG_FILE", "logs/app.log").strip(),
            http_port=_parse_port(os.getenv("HTTP_PORT", "0")),
        )

    def validate(self, require_discord: bool = True) -> List[str]:
        """Return every configuration problem found (empty list if valid)."""
        errors = []

        if require_discord:
            if not self.discord.bot_token:
                errors.append("DISCORD_BOT_TOKEN is required")
            elif not validate_bot_token(self.discord.bot_token):
                errors.append("DISCORD_BOT_TOKEN has invalid format")

            if not self.discord.client_id:
                errors.append("DISCORD_CLIENT_ID is required")
            elif not validate_snowflake(self.discord.client_id):
                errors.append("DISCORD_CLIENT_ID has invalid format")

        if not self.webhook.url:
            errors.append("N8N_WEBHOOK_URL is required")
        elif not validate_url(self.webhook.url):
            errors.append("N8N_WEBHOOK_URL has invalid URL format")

        if self.webhook.secondary_url and not validate_url(self.webhook.secondary_url):
            errors.append("N8N_SECONDARY_WEBHOOK has invalid URL format")

        if self.bot.command_channel_id and not validate_snowflake(self.bot.command_channel_id):
            errors.append("COMMAND_CHANNEL_ID has invalid format")

        if self.http_port < 0 or self.http_port > 65535:
            errors.append("HTTP_PORT must be an integer between 0 and 65535")

        return errors

    def ensure_valid(self, require_discord: bool = True) -> "AppConfig":
        errors = self.validate(require_discord=require_discord)
        if errors:
            raise ConfigValidationError(errors)
        return self
