"""Common FastAPI dependencies reused across controllers."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request

from medlens.services.chat_session import ChatSessionManager


def get_chat_manager(request: Request) -> ChatSessionManager:
    """Return the chat session manager owned by the running application."""

    return request.app.state.chat_manager


ChatManagerDep = Annotated[ChatSessionManager, Depends(get_chat_manager)]


__all__ = ["get_chat_manager", "ChatManagerDep"]
