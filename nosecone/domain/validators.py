"""Input validation helpers."""

import re
from urllib.parse import urlparse

from nosecone.domain.models import MAX_CONTENT_LENGTH

_BOT_TOKEN_RE = re.compile(r"^[A-Za-z0-9_-]{23,28}\.[A-Za-z0-9_-]{6}\.[A-Za-z0-9_-]{27,}$")
_SNOWFLAKE_RE = re.compile(r"^\d{17,19}$")


def validate_url(url) -> bool:
    if not url or not isinstance(url, str):
        return False
    try:
        parsed = urlparse(url)
    except ValueError:
        return False
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


def validate_snowflake(value) -> bool:
    if not value or not isinstance(value, str):
        return False
    return bool(_SNOWFLAKE_RE.match(value))


def validate_bot_token(token) -> bool:
    if not token or not isinstance(token, str):
        return False
    return bool(_BOT_TOKEN_RE.match(token))


def sanitize_input(text) -> str:
    """Strip markup-breaking characters and cap at the Discord message limit."""
    if not isinstance(text, str):
        return ""
    text = re.sub(r"[<>`]", "", text)
    return text.strip()[:MAX_CONTENT_LENGTH]
