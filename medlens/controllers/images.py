"""Visual summary endpoint."""

from fastapi import APIRouter

from medlens.services.illustration import generate_visual_summary
from medlens.views import VisualSummaryRequest, VisualSummaryResponse

router = APIRouter(prefix="/images", tags=["images"])


@router.post("/summary", response_model=VisualSummaryResponse)
async def create_visual_summary(request: VisualSummaryRequest) -> VisualSummaryResponse:
    """Illustrate a plain-language summary; returns a base64 image data URI."""

    image_url = await generate_visual_summary(request.summary)
    return VisualSummaryResponse(image_url=image_url)
