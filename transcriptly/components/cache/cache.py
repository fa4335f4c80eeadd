import hashlib
import logging
import os
import time
import threading
from pathlib import Path
from typing import Callable, Optional

from pydantic import ValidationError

from transcriptly.components.cache.schemas import CacheEntry
from transcriptly.models.config import CACHE_TTL_SECONDS, DEFAULT_CACHE_DIR

_logger = logging.getLogger(__name__)


class TranscriptCache:
    """Filesystem cache of transcripts keyed by (video ID, language).

    The cache is best-effort: read, write and initialisation errors are logged
    and never raised. If the cache directory cannot be created, every lookup
    misses and every store is skipped.
    """

    def __init__(
        self,
        cache_dir: Optional[Path] = None,
        ttl_seconds: float = CACHE_TTL_SECONDS,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.cache_dir = Path(cache_dir) if cache_dir else DEFAULT_CACHE_DIR
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        # None until the first use; False once initialisation has failed.
        self._ready: Optional[bool] = None

    def _ensure_dir(self) -> bool:
        if self._ready is not None:
            return self._ready
        try:
            self.cache_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            _logger.warning(
                "Cache directory %s unavailable, caching disabled: %s",
                self.cache_dir,
                exc,
            )
            self._ready = False
            return False
        self._ready = True
        return True

    def key_path(self, video_id: str, lang: str) -> Path:
        """Return the file that holds the entry for (video_id, lang)."""
        digest = hashlib.sha256(f"{video_id}:{lang}".encode("utf-8")).hexdigest()
        return self.cache_dir / f"{digest}.json"

    def lookup(self, video_id: str, lang: str) -> Optional[str]:
        if not self._ensure_dir():
            return None

        path = self.key_path(video_id, lang)
        try:
            entry = CacheEntry.model_validate_json(path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return None
        except (OSError, ValidationError) as exc:
            _logger.debug("Unreadable cache entry %s: %s", path.name, exc)
            return None

        age = self._clock() - entry.written_at
        if age >= self.ttl_seconds:
            _logger.debug("Cache entry for %s (%s) expired", video_id, lang)
            self._remove(path)
            return None

        _logger.debug("Cache hit for %s (%s), age %.0fs", video_id, lang, age)
        return entry.text

    def store(self, video_id: str, lang: str, text: str) -> None:
        if not self._ensure_dir():
            return

        path = self.key_path(video_id, lang)
        entry = CacheEntry(text=text, written_at=self._clock())
        tmp_path = path.with_name(
            f"{path.name}.{os.getpid()}.{threading.get_ident()}.tmp"
        )
        try:
            tmp_path.write_text(entry.model_dump_json(), encoding="utf-8")
            os.replace(tmp_path, path)
        except OSError as exc:
            _logger.warning("Failed to write cache for %s (%s): %s", video_id, lang, exc)
            self._remove(tmp_path)

    def clear(self) -> int:
        """Delete every cached entry and return how many were removed."""
        if not self._ensure_dir():
            return 0
        removed = 0
        for path in self.cache_dir.glob("*.json"):
            if self._remove(path):
                removed += 1
        return removed

    @staticmethod
    def _remove(path: Path) -> bool:
        try:
            path.unlink()
        except FileNotFoundError:
            return False
        except OSError as exc:
            _logger.warning("Failed to remove cache file %s: %s", path, exc)
            return False
        return True
