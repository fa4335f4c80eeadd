from datetime import datetime

from pydantic import BaseModel, Field


class TranscriptResult(BaseModel):
    """A retrieved transcript together with descriptive metadata."""

    text: str = Field(description="Full transcript as plain text")
    video_id: str = Field(description="YouTube video ID")
    language: str = Field(description="Language code the transcript was requested in")
    char_count: int = Field(ge=0, description="Number of characters in the transcript")
    completed_at: datetime = Field(description="When retrieval finished (UTC)")
    source: str = Field(
        description="Where the transcript came from: cache, structured or raw_scrape"
    )
