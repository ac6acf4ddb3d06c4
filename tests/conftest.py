"""Pytest fixtures for Lyric Grader tests."""

from pathlib import Path
from unittest.mock import MagicMock

import pytest

from lyric_grader import config
from lyric_grader.models.analysis import AnalysisResult
from lyric_grader.pipeline import analyze_lyrics

LOVE_SONG = (
    "[Verse 1]\n"
    "Baby you're my heart, my forever love\n"
    "I never let you go, you're heaven sent above\n"
    "[Chorus]\n"
    "You and me, we're meant to be\n"
    "Baby, baby, you're my destiny"
)

RAP_VERSE = (
    "Yo, I spit fire on the mic every night\n"
    "Bars so cold, my flow is tight\n"
    "Grind all day, stack paper, get that bread\n"
    "King of the city, the crown on my head"
)


@pytest.fixture
def love_song() -> str:
    """Return a short General-profile lyric full of clichés."""
    return LOVE_SONG


@pytest.fixture
def rap_verse() -> str:
    """Return a four-bar lyric that classifies as rap."""
    return RAP_VERSE


@pytest.fixture
def love_result(love_song: str) -> AnalysisResult:
    """Return the analysis of the love song."""
    return analyze_lyrics(love_song)


@pytest.fixture
def rap_result(rap_verse: str) -> AnalysisResult:
    """Return the analysis of the rap verse."""
    return analyze_lyrics(rap_verse)


@pytest.fixture(autouse=True)
def reset_settings():
    """Drop any settings configured by a test."""
    yield
    config._settings = None


def _response(status: int = 200, payload=None, reason: str = "OK") -> MagicMock:
    response = MagicMock()
    response.ok = status < 400
    response.status_code = status
    response.reason = reason
    if payload is None:
        response.json.side_effect = ValueError("No JSON body")
    else:
        response.json.return_value = payload
    return response


@pytest.fixture
def make_response():
    """Return a factory for stand-ins of requests.Response."""
    return _response


@pytest.fixture
def session() -> MagicMock:
    """Return a mock requests.Session."""
    return MagicMock()


@pytest.fixture
def audio_file(tmp_path: Path) -> Path:
    """Return a small fake MP3 file."""
    path = tmp_path / "song.mp3"
    path.write_bytes(b"ID3fake-audio")
    return path
