"""API route handlers."""

from api.routes import health, reserve

__all__ = ["health", "reserve"]
