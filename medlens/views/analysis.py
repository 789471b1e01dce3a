"""Schemas for the document analysis endpoint."""

from pydantic import BaseModel, Field

from medlens.services.response_contract import AnalysisRecord


class AnalysisResponse(BaseModel):
    """Normalized analysis plus whether follow-up chat is available."""

    analysis: AnalysisRecord
    chat_ready: bool = Field(
        ..., description="True when a chat session was seeded with the report"
    )
