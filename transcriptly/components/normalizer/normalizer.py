import re
from urllib.parse import parse_qs, urlparse

from transcriptly.errors import InvalidInputError

VIDEO_ID_PATTERN = re.compile(r"^[A-Za-z0-9_-]{11}$")

SHORT_LINK_HOSTS = ("youtu.be", "www.youtu.be")
MAIN_DOMAIN = "youtube.com"


def is_video_id(value: str) -> bool:
    """Return True if value is a well-formed 11-character video ID."""
    return bool(VIDEO_ID_PATTERN.fullmatch(value))


def normalize(value: str) -> str:
    """Extract the canonical video ID from a YouTube URL or raw ID.

    Accepts share links (``https://youtu.be/<id>``), watch URLs
    (``https://www.youtube.com/watch?v=<id>``) and bare 11-character IDs.

    Raw IDs must match exactly; surrounding whitespace is not stripped.

    Raises:
        InvalidInputError: if no valid video ID can be extracted.
    """
    if not value:
        raise InvalidInputError("YouTube URL or ID is required")

    try:
        parsed = urlparse(value)
        is_url = bool(parsed.scheme and parsed.hostname)
    except ValueError:
        is_url = False

    if not is_url:
        if not is_video_id(value):
            raise InvalidInputError(f"Invalid YouTube video ID: {value}")
        return value

    host = parsed.hostname.lower()
    if host in SHORT_LINK_HOSTS:
        video_id = parsed.path.lstrip("/")
    elif MAIN_DOMAIN in host:
        video_id = parse_qs(parsed.query).get("v", [""])[0]
        if not video_id:
            raise InvalidInputError(f"Invalid YouTube URL: {value}")
    else:
        raise InvalidInputError(f"Could not extract video ID from: {value}")

    if not is_video_id(video_id):
        raise InvalidInputError(f"Invalid YouTube video ID in URL: {value}")
    return video_id
