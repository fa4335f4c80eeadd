from typing import Protocol, runtime_checkable

from transcriptly.components.sources.schemas import FetchConfig

RATE_LIMIT_MARKERS = ("429", "too many requests", "blocked", "forbidden")


def looks_rate_limited(message: str) -> bool:
    """Return True if an upstream error message hints at rate limiting or blocking.

    Used for diagnostics only; it does not change retry behaviour.
    """
    lowered = message.lower()
    return any(marker in lowered for marker in RATE_LIMIT_MARKERS)


@runtime_checkable
class TranscriptSource(Protocol):
    """A way of turning (video ID, language) into plain transcript text."""

    name: str

    def fetch(self, video_id: str, lang: str, config: FetchConfig) -> str:
        """Return the transcript text or raise FetchError."""
        ...
