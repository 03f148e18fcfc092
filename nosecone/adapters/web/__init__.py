"""HTTP surface (FastAPI)."""

from nosecone.adapters.web.server import create_app

__all__ = ["create_app"]
