from pydantic import BaseModel, Field


class TranscriptSegment(BaseModel):
    text: str
    start: float = Field(..., description="Offset from the start of the video, in seconds")
    duration: float = Field(..., description="Length of the segment, in seconds")


class ErrorResponse(BaseModel):
    error: str
