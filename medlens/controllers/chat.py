"""Follow-up chat endpoints grounded in the latest analysis report."""

import logging

from fastapi import APIRouter

from medlens.controllers.dependencies import ChatManagerDep
from medlens.services.chat_session import make_turn
from medlens.views import (
    ChatExchangeResponse,
    ChatMessageRequest,
    ChatSessionRequest,
    ChatSessionResponse,
    ChatTurnView,
)

router = APIRouter(prefix="/chat", tags=["chat"])

logger = logging.getLogger(__name__)


@router.post("/session", response_model=ChatSessionResponse)
async def start_session(
    payload: ChatSessionRequest,
    chat_manager: ChatManagerDep,
) -> ChatSessionResponse:
    """Seed a fresh chat from a report, e.g. when a saved session is restored."""

    session = chat_manager.init_session(payload.context)
    if session is None:
        logger.warning("Chat session requested without a configured API key")
        return ChatSessionResponse(ready=False)
    return ChatSessionResponse(ready=True, session_id=session.id)


@router.post("/messages", response_model=ChatExchangeResponse)
async def send_message(
    payload: ChatMessageRequest,
    chat_manager: ChatManagerDep,
) -> ChatExchangeResponse:
    """Send one user turn and return it alongside the model's reply."""

    user_turn = make_turn("user", payload.message)
    reply = await chat_manager.send_turn(payload.message)
    model_turn = make_turn("model", reply)

    return ChatExchangeResponse(
        user_turn=ChatTurnView.model_validate(user_turn),
        model_turn=ChatTurnView.model_validate(model_turn),
    )
