from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Health check response."""

    status: Literal["healthy"] = "healthy"
    version: str
    proxy_configured: bool = Field(
        default=False, description="Whether outbound fetches go through a proxy"
    )
    cache_dir: str = Field(..., description="Where cached transcripts are stored")


class TranscriptMetadata(BaseModel):
    """Informational metadata attached to a transcript."""

    video_id: str
    language: str
    char_count: int = Field(..., ge=0)
    timestamp: datetime = Field(..., description="When retrieval completed (UTC)")
    source: str = Field(..., description="cache, structured or raw_scrape")


class TranscriptResponse(BaseModel):
    """Transcript text, or an in-band error when every source failed."""

    text: str = Field(..., description="Transcript text, or the error message")
    is_error: bool = Field(default=False)
    metadata: TranscriptMetadata | None = Field(default=None)

    model_config = {
        "json_schema_extra": {
            "example": {
                "text": "Never gonna give you up never gonna let you down",
                "is_error": False,
                "metadata": {
                    "video_id": "dQw4w9WgXcQ",
                    "language": "en",
                    "char_count": 48,
                    "timestamp": "2025-01-01T12:00:00Z",
                    "source": "structured",
                },
            }
        }
    }


class ErrorResponse(BaseModel):
    """Error response schema."""

    error: str = Field(..., description="Error type")
    message: str = Field(..., description="Error message")
    detail: str | None = Field(default=None, description="Additional error details")

    model_config = {
        "json_schema_extra": {
            "example": {
                "error": "InvalidInput",
                "message": "Invalid YouTube video ID: not-a-video",
                "detail": None,
            }
        }
    }
