import asyncio
import logging
from datetime import datetime, timezone
from typing import Awaitable, Callable, Optional

from transcriptly.components.cache.cache import TranscriptCache
from transcriptly.components.normalizer.normalizer import normalize
from transcriptly.components.sources import (
    FetchConfig,
    RawScrapeSource,
    StructuredSource,
    TranscriptSource,
)
from transcriptly.errors import FetchError, InvalidInputError, RetrievalFailedError
from transcriptly.models.config import (
    BASE_DELAY_SECONDS,
    DEFAULT_LANGUAGE,
    MAX_ATTEMPTS,
)
from transcriptly.schemas import TranscriptResult
from transcriptly.utils.profile import timer

_logger = logging.getLogger(__name__)

Sleep = Callable[[float], Awaitable[None]]


def backoff_delay(attempt: int) -> float:
    """Delay before the given 1-based attempt; the first attempt has none."""
    if attempt <= 1:
        return 0.0
    return BASE_DELAY_SECONDS * 2 ** (attempt - 2)


async def _fetch(
    source: TranscriptSource, video_id: str, lang: str, config: FetchConfig
) -> str:
    """Run a blocking source in a worker thread.

    Unexpected exceptions are treated as transient and wrapped in FetchError.
    """
    try:
        return await asyncio.to_thread(source.fetch, video_id, lang, config)
    except (FetchError, InvalidInputError):
        raise
    except Exception as exc:
        raise FetchError(source.name, str(exc) or exc.__class__.__name__) from exc


class TranscriptRetriever:
    """Cache lookup, retried primary fetch and a single fallback fetch.

    Each call runs strictly sequentially. Concurrent calls for the same video
    are not deduplicated; the cache write is a whole-entry overwrite so the
    last writer wins.
    """

    def __init__(
        self,
        config: Optional[FetchConfig] = None,
        cache: Optional[TranscriptCache] = None,
        primary: Optional[TranscriptSource] = None,
        fallback: Optional[TranscriptSource] = None,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        self.config = config or FetchConfig()
        self.cache = cache or TranscriptCache()
        self.primary = primary or StructuredSource()
        self.fallback = fallback or RawScrapeSource()
        self._sleep = sleep

    async def fetch_text(self, video_id: str, lang: str) -> tuple[str, str]:
        """Return ``(text, source_name)`` for an already normalised video ID.

        Raises:
            InvalidInputError: if the primary source rejects the input.
            RetrievalFailedError: if the primary retries and the fallback all fail.
        """
        cached = await asyncio.to_thread(self.cache.lookup, video_id, lang)
        if cached is not None:
            _logger.info(f"Serving transcript for {video_id} ({lang}) from cache")
            return cached, "cache"

        last_error: Optional[FetchError] = None
        for attempt in range(1, MAX_ATTEMPTS + 1):
            delay = backoff_delay(attempt)
            if delay:
                _logger.info(
                    "Retrying %s in %.1fs (attempt %d/%d)",
                    video_id,
                    delay,
                    attempt,
                    MAX_ATTEMPTS,
                )
                await self._sleep(delay)

            try:
                text = await _fetch(self.primary, video_id, lang, self.config)
            except FetchError as exc:
                last_error = exc
                _logger.warning(
                    "Attempt %d/%d failed for %s: %s", attempt, MAX_ATTEMPTS, video_id, exc
                )
                continue

            await asyncio.to_thread(self.cache.store, video_id, lang, text)
            return text, self.primary.name

        _logger.warning(f"Primary source exhausted for {video_id}, trying fallback")
        try:
            text = await _fetch(self.fallback, video_id, lang, self.config)
        except FetchError as exc:
            _logger.error(f"Fallback failed for {video_id}: {exc}")
            raise RetrievalFailedError(
                str(last_error) if last_error else "no attempts made",
                fallback_error=str(exc),
            ) from exc

        await asyncio.to_thread(self.cache.store, video_id, lang, text)
        return text, self.fallback.name

    async def retrieve(self, url_or_id: str, lang: Optional[str] = None) -> TranscriptResult:
        """Normalise the input and return the transcript with its metadata."""
        lang = lang or DEFAULT_LANGUAGE
        _logger.info(f"Processing transcript request for: {url_or_id}, language: {lang}")

        video_id = normalize(url_or_id)
        with timer(f"Transcript retrieval for {video_id}"):
            text, source = await self.fetch_text(video_id, lang)

        _logger.info(f"Extracted transcript for {video_id} ({len(text)} chars)")
        return TranscriptResult(
            text=text,
            video_id=video_id,
            language=lang,
            char_count=len(text),
            completed_at=datetime.now(timezone.utc),
            source=source,
        )
