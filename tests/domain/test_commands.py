"""Tests for prefix command parsing and formatting helpers."""

import pytest

from nosecone.domain.commands import format_uptime, manual_trigger_command, parse_command, truncate_text
from nosecone.domain.validators import (
    sanitize_input,
    validate_bot_token,
    validate_snowflake,
    validate_url,
)


class TestParseCommand:
    def test_basic(self):
        parsed = parse_command("!Deploy  now   please")
        assert parsed.command == "deploy"
        assert parsed.args == ["now", "please"]

    def test_custom_prefix(self):
        assert parse_command("?ping", "?").command == "ping"

    def test_not_a_command(self):
        assert parse_command("hello !deploy") is None

    def test_prefix_only(self):
        assert parse_command("!   ") is None


class TestFormatting:
    def test_truncate(self):
        assert truncate_text("short") == "short"
        out = truncate_text("x" * 150)
        assert len(out) == 100
        assert out.endswith("...")

    @pytest.mark.parametrize("seconds, expected", [
        (0, "0s"),
        (59, "59s"),
        (3600, "1h"),
        (90061, "1d 1h 1m 1s"),
    ])
    def test_uptime(self, seconds, expected):
        assert format_uptime(seconds) == expected

    def test_manual_trigger_command(self):
        cmd = manual_trigger_command("hi")
        assert cmd.to_dict() == {
            "name": "workflow",
            "type": "manual",
            "options": {"message": "hi"},
            "subcommand": "trigger",
        }


class TestValidators:
    @pytest.mark.parametrize("url, ok", [
        ("https://n8n.example.com/webhook/abc", True),
        ("http://localhost:5678/webhook", True),
        ("ftp://example.com", False),
        ("not a url", False),
        ("", False),
        (None, False),
    ])
    def test_url(self, url, ok):
        assert validate_url(url) is ok

    def test_snowflake(self):
        assert validate_snowflake("123456789012345678") is True
        assert validate_snowflake("1234") is False
        assert validate_snowflake(123456789012345678) is False

    def test_bot_token(self):
        assert validate_bot_token("A" * 24 + "." + "B" * 6 + "." + "C" * 27) is True
        assert validate_bot_token("nope") is False

    def test_sanitize(self):
        assert sanitize_input("  <b>`hi`</b>  ") == "bhi/b"
        assert len(sanitize_input("x" * 3000)) == 2000
        assert sanitize_input(None) == ""
