"""Process logger — stderr plus an append-only log file."""

import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

_state = {
    "debug": False,
    "log_file": None,
}


def configure(debug_mode: bool = False, log_file: Optional[str] = None):
    """Set debug gating and the log file. Called once by the launcher."""
    _state["debug"] = debug_mode
    if log_file:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        _state["log_file"] = path
    else:
        _state["log_file"] = None


def is_debug() -> bool:
    return _state["debug"]


def _format(level: str, msg: str) -> str:
    ts = datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")
    return f"[{ts}] {level}: {msg}"


def _write(level: str, msg: str):
    line = _format(level, msg)
    print(line, file=sys.stderr)
    path = _state["log_file"]
    if path is None:
        return
    try:
        with open(path, "a", encoding="utf-8") as f:
            f.write(line + "\n")
    except OSError as e:
        print(f"Failed to write log file {path}: {e}", file=sys.stderr)


def info(msg: str):
    _write("INFO", msg)


def warn(msg: str):
    _write("WARN", msg)


def error(msg: str):
    _write("ERROR", msg)


def debug(msg: str):
    if _state["debug"]:
        _write("DEBUG", msg)
