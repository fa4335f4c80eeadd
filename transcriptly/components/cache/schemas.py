from pydantic import BaseModel, Field


class CacheEntry(BaseModel):
    """A cached transcript together with the time it was written."""

    text: str = Field(description="Flattened transcript text")
    written_at: float = Field(ge=0.0, description="Write time as a Unix timestamp")
