import logging
import re

import requests

from transcriptly.components.sources.schemas import FetchConfig
from transcriptly.errors import FetchError
from transcriptly.models.config import REQUEST_TIMEOUT_SECONDS, TIMEDTEXT_ENDPOINT

_logger = logging.getLogger(__name__)

_TEXT_SPAN = re.compile(r"<text[^>]*>(.*?)</text>", re.DOTALL)
_TAG = re.compile(r"<[^>]+>")

# Order matters: &amp; goes last so "&amp;lt;" stays "&lt;".
_ENTITIES = (
    ("&lt;", "<"),
    ("&gt;", ">"),
    ("&quot;", '"'),
    ("&#39;", "'"),
    ("&amp;", "&"),
)


def unescape_entities(text: str) -> str:
    for entity, char in _ENTITIES:
        text = text.replace(entity, char)
    return text


def parse_timedtext(body: str) -> str:
    """Extract caption text from a timedtext XML document.

    Only ``<text>`` spans are considered; any markup nested inside a span is
    stripped before the standard entities are unescaped.
    """
    parts = []
    for span in _TEXT_SPAN.findall(body):
        text = unescape_entities(_TAG.sub("", span)).strip()
        if text:
            parts.append(text)
    return " ".join(parts)


class RawScrapeSource:
    """Fallback source: scrape the raw timedtext endpoint."""

    name = "raw_scrape"

    def __init__(self, endpoint: str = TIMEDTEXT_ENDPOINT):
        self.endpoint = endpoint

    def fetch(self, video_id: str, lang: str, config: FetchConfig) -> str:
        try:
            response = requests.get(
                self.endpoint,
                params={"lang": lang, "v": video_id},
                headers={"User-Agent": config.user_agent},
                proxies=config.proxies,
                timeout=REQUEST_TIMEOUT_SECONDS,
            )
        except requests.RequestException as exc:
            raise FetchError(self.name, str(exc) or exc.__class__.__name__) from exc

        if not response.ok:
            raise FetchError(
                self.name, f"HTTP {response.status_code} from timedtext endpoint"
            )

        text = parse_timedtext(response.text)
        if not text:
            raise FetchError(self.name, f"No captions found for {video_id} ({lang})")

        _logger.debug("Scraped %d characters for %s (%s)", len(text), video_id, lang)
        return text
