"""Contact domain API package."""

from contact.api.routes import message_router

__all__ = ["message_router"]
