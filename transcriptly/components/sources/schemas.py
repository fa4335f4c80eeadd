from dataclasses import dataclass
from typing import Optional

from pydantic import BaseModel, Field

from transcriptly.models.config import USER_AGENT


class TranscriptLine(BaseModel):
    """A single timed caption line returned by the captions API."""

    text: str = Field(description="The text content of this line")
    start: float = Field(ge=0.0, description="Start time in seconds")
    duration: float = Field(ge=0.0, description="Duration in seconds")


@dataclass(frozen=True)
class FetchConfig:
    """Network settings shared by every transcript source.

    Resolved once from the application settings and passed explicitly into
    each fetch so sources never read the environment themselves.
    """

    proxy_url: Optional[str] = None
    user_agent: str = USER_AGENT

    @property
    def proxies(self) -> Optional[dict[str, str]]:
        if not self.proxy_url:
            return None
        return {"http": self.proxy_url, "https": self.proxy_url}
