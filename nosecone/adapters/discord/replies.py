"""Reply texts sent back to Discord users."""

from typing import Optional

from nosecone.domain.commands import truncate_text
from nosecone.domain.models import DeliveryResult, DispatchOutcome


def help_text(prefix: str = "!") -> str:
    return (
        "**NoseCone commands**\n"
        f"`{prefix}workflow test` — test the webhook connection\n"
        f"`{prefix}workflow trigger <message>` — send a message to the workflow\n"
        f"`{prefix}workflow status` — bot and webhook status\n"
        f"`{prefix}help` — this help\n\n"
        "Messages in the command channel and direct messages are forwarded automatically."
    )


def workflow_usage(prefix: str = "!") -> str:
    return f"❌ Usage: `{prefix}workflow test|trigger <message>|status`"


def ack_text(outcome: DispatchOutcome) -> str:
    if outcome.succeeded:
        return "✅ Message sent to webhook"
    return "❌ Message failed to send to webhook"


def _error_message(result: Optional[DeliveryResult]) -> str:
    if result is None or result.error is None:
        return "Unknown error"
    return truncate_text(result.error.message, 300)


def connectivity_reply(result: DeliveryResult) -> str:
    if result.success:
        return (
            "✅ **Webhook Test Successful**\n"
            "The webhook connection is working. Messages will reach your workflows."
        )
    return (
        "❌ **Webhook Test Failed**\n"
        f"Error: {_error_message(result)}\n"
        "Check the webhook URL and make sure it is reachable."
    )


def trigger_reply(outcome: DispatchOutcome, text: str) -> str:
    if not outcome.primary.success:
        return (
            "❌ **Failed to Send Message**\n"
            f"Error: {_error_message(outcome.primary)}"
        )
    lines = [
        "✅ **Message Sent Successfully**",
        f"**Message:** \"{truncate_text(text, 200)}\"",
    ]
    if outcome.secondary is not None:
        if outcome.secondary.success:
            lines.append("✅ Also sent to secondary webhook")
        else:
            lines.append("⚠️ Secondary webhook failed")
    return "\n".join(lines)


def status_reply(
    uptime: str,
    guild_count: int,
    connectivity: DeliveryResult,
    has_secondary: bool,
    prefix: str,
    debug_mode: bool,
    command_channel_id: str,
) -> str:
    return "\n".join([
        "🤖 **NoseCone Status**",
        f"**Uptime:** {uptime}",
        f"**Guilds:** {guild_count}",
        f"**Webhook:** {'✅ Connected' if connectivity.success else '❌ Disconnected'}",
        f"**Secondary webhook:** {'Configured' if has_secondary else 'Not configured'}",
        f"**Command prefix:** `{prefix}`",
        f"**Debug mode:** {'Enabled' if debug_mode else 'Disabled'}",
        f"**Command channel:** {command_channel_id or 'All channels'}",
    ])
