import logging
from typing import Iterable

import requests
from youtube_transcript_api import InvalidVideoId, YouTubeTranscriptApi
from youtube_transcript_api.proxies import GenericProxyConfig

from transcriptly.components.sources.base import looks_rate_limited
from transcriptly.components.sources.schemas import FetchConfig, TranscriptLine
from transcriptly.errors import FetchError, InvalidInputError

_logger = logging.getLogger(__name__)


def format_transcript(lines: Iterable[TranscriptLine]) -> str:
    """Flatten timed lines into a single paragraph of text.

    Each line is trimmed, empty lines are dropped and the rest are joined with
    a single space. Timing information is discarded.
    """
    texts = (line.text.strip() for line in lines)
    return " ".join(text for text in texts if text)


class StructuredSource:
    """Primary source: the captions API via youtube-transcript-api."""

    name = "structured"

    def _build_api(
        self, session: requests.Session, config: FetchConfig
    ) -> YouTubeTranscriptApi:
        session.headers.update({"User-Agent": config.user_agent})

        proxy_config = None
        if config.proxy_url:
            proxy_config = GenericProxyConfig(
                http_url=config.proxy_url, https_url=config.proxy_url
            )
        return YouTubeTranscriptApi(proxy_config=proxy_config, http_client=session)

    def fetch_lines(
        self, video_id: str, lang: str, config: FetchConfig
    ) -> list[TranscriptLine]:
        try:
            with requests.Session() as session:
                ytt_api = self._build_api(session, config)
                transcript = ytt_api.fetch(video_id, languages=[lang])
            lines = [
                TranscriptLine(
                    text=snippet.text, start=snippet.start, duration=snippet.duration
                )
                for snippet in transcript
            ]
        except InvalidVideoId as exc:
            raise InvalidInputError(f"Invalid YouTube video ID: {video_id}") from exc
        except Exception as exc:
            detail = str(exc) or exc.__class__.__name__
            rate_limited = looks_rate_limited(detail)
            if rate_limited:
                _logger.warning(f"Rate limited or blocked fetching {video_id}")
            raise FetchError(self.name, detail, rate_limited=rate_limited) from exc

        _logger.debug(f"Fetched {len(lines)} caption lines for {video_id} ({lang})")
        return lines

    def fetch(self, video_id: str, lang: str, config: FetchConfig) -> str:
        return format_transcript(self.fetch_lines(video_id, lang, config))
