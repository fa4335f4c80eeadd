import tempfile
from pathlib import Path

# Retrieval policy. These are fixed for the lifetime of the process.
MAX_ATTEMPTS = 3
BASE_DELAY_SECONDS = 1.0
CACHE_TTL_SECONDS = 24 * 60 * 60
DEFAULT_LANGUAGE = "en"

USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/124.0.0.0 Safari/537.36"
)
TIMEDTEXT_ENDPOINT = "https://video.google.com/timedtext"
REQUEST_TIMEOUT_SECONDS = 10

DEFAULT_CACHE_DIR = Path(tempfile.gettempdir()) / "transcriptly-cache"
