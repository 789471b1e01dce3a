"""Schema for visual summary requests."""

from pydantic import BaseModel, Field


class VisualSummaryRequest(BaseModel):
    summary: str = Field(..., min_length=1)


class VisualSummaryResponse(BaseModel):
    image_url: str
