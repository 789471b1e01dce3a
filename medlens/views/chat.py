from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field


class ChatSessionRequest(BaseModel):
    """Seed (or restore) the chat with a previously generated report."""

    context: str = Field(
        ..., min_length=1, description="Markdown report the chat is grounded in"
    )


class ChatSessionResponse(BaseModel):
    ready: bool
    session_id: Optional[str] = None


class ChatMessageRequest(BaseModel):
    message: str = Field(..., min_length=1)


class ChatTurnView(BaseModel):
    id: str
    role: Literal["user", "model"]
    text: str
    timestamp: datetime

    model_config = {"from_attributes": True}


class ChatExchangeResponse(BaseModel):
    """The user's turn and the model's reply, in transcript order."""

    user_turn: ChatTurnView
    model_turn: ChatTurnView
