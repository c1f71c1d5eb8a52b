from fastapi import APIRouter, Depends, Query, Request
from typing import List, Optional
from ..models import ErrorResponse, TranscriptSegment
from ..services.transcript_service import TranscriptService

router = APIRouter()


def get_transcript_service(request: Request) -> TranscriptService:
    return request.app.state.transcript_service


@router.get(
    "/get_transcript",
    response_model=List[TranscriptSegment],
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def get_transcript(
    videoId: Optional[str] = Query(None, description="The ID of the YouTube video"),
    service: TranscriptService = Depends(get_transcript_service),
):
    """
    Fetch the YouTube transcript with automatic language fallback.
    """
    return await service.get_transcript(videoId)
