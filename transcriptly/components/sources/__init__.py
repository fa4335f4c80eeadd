from transcriptly.components.sources.base import TranscriptSource
from transcriptly.components.sources.raw_scrape import RawScrapeSource
from transcriptly.components.sources.schemas import FetchConfig, TranscriptLine
from transcriptly.components.sources.structured import StructuredSource

__all__ = [
    "FetchConfig",
    "RawScrapeSource",
    "StructuredSource",
    "TranscriptLine",
    "TranscriptSource",
]
