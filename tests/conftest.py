import pytest

from transcriptly.components.cache.cache import TranscriptCache
from transcriptly.errors import FetchError


class FakeSource:
    """Transcript source that replays a scripted list of results."""

    def __init__(self, name, outcomes):
        self.name = name
        self.outcomes = list(outcomes)
        self.calls = []

    def fetch(self, video_id, lang, config):
        self.calls.append((video_id, lang, config))
        outcome = self.outcomes.pop(0)
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome


class SleepRecorder:
    def __init__(self):
        self.delays = []

    async def __call__(self, delay):
        self.delays.append(delay)


def transient(message="connection reset"):
    return FetchError("structured", message)


@pytest.fixture
def cache(tmp_path):
    return TranscriptCache(cache_dir=tmp_path / "cache")


@pytest.fixture
def sleep():
    return SleepRecorder()
