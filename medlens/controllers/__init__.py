"""FastAPI routers acting as controllers in the MVC architecture."""

from . import analysis, audio, chat, images

__all__ = ["analysis", "audio", "chat", "images"]
