"""Infrastructure — logging and other process-level plumbing."""

from nosecone.infrastructure.log import configure, debug, error, info, warn

__all__ = ["configure", "debug", "error", "info", "warn"]
