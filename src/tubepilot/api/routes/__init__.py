"""API route modules."""

from tubepilot.api.routes import process

__all__ = ["process"]
