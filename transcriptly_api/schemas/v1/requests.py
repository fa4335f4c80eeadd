from pydantic import BaseModel, Field

from transcriptly.models.config import DEFAULT_LANGUAGE


class TranscriptRequest(BaseModel):
    """Request schema for retrieving a YouTube transcript."""

    url: str = Field(
        ...,
        description="YouTube video URL or ID",
        examples=["https://www.youtube.com/watch?v=dQw4w9WgXcQ"],
    )
    lang: str = Field(
        default=DEFAULT_LANGUAGE,
        min_length=1,
        description='Language code for transcript (e.g., "ko", "en")',
    )

    model_config = {
        "json_schema_extra": {
            "example": {
                "url": "https://youtu.be/dQw4w9WgXcQ",
                "lang": "en",
            }
        }
    }
