from typing import Optional


class TranscriptError(Exception):
    """Base class for every error raised by the retrieval pipeline."""


class InvalidInputError(TranscriptError):
    """The caller supplied a URL or video ID that cannot be used."""


class FetchError(TranscriptError):
    """A transcript source failed to produce a transcript."""

    def __init__(self, source: str, detail: str, rate_limited: bool = False):
        self.source = source
        self.detail = detail
        self.rate_limited = rate_limited
        prefix = "Rate limited by upstream" if rate_limited else "Failed to fetch"
        super().__init__(f"{prefix} ({source}): {detail}")


class RetrievalFailedError(TranscriptError):
    """Every transcript source was tried and none succeeded."""

    def __init__(self, last_error: str, fallback_error: Optional[str] = None):
        self.last_error = last_error
        self.fallback_error = fallback_error
        message = f"Failed to retrieve transcript after retries: {last_error}"
        if fallback_error:
            message += f" (fallback also failed: {fallback_error})"
        super().__init__(message)
