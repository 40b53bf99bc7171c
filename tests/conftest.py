"""Shared test fixtures."""

import random

import pytest

from shufflecast.feeds.models import Episode, Feed
from shufflecast.playback.controller import PlaybackController
from shufflecast.playback.testing import FakeEngineFactory

SAMPLE_RSS = b"""<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0" xmlns:itunes="http://www.itunes.com/dtds/podcast-1.0.dtd">
  <channel>
    <title>Sample Show</title>
    <description>A show about samples</description>
    <itunes:image href="https://example.com/show.jpg"/>
    <item>
      <title>  Episode One  </title>
      <description>
        First episode
      </description>
      <enclosure url="https://example.com/ep1.mp3" type="audio/mpeg" length="100"/>
    </item>
    <item>
      <title>Episode Two</title>
      <description>Second episode</description>
      <itunes:image href="https://example.com/ep2.jpg"/>
      <enclosure url="https://example.com/ep2.mp3" type="audio/mpeg" length="200"/>
    </item>
  </channel>
</rss>
"""


def make_episode(title: str, number: int = 1) -> Episode:
    return Episode(
        title=title,
        description=f"About {title}",
        audio_url=f"https://example.com/{number}.mp3",  # type: ignore[arg-type]
        podcast_name="Sample Show",
    )


@pytest.fixture
def sample_rss() -> bytes:
    return SAMPLE_RSS


@pytest.fixture
def episodes() -> list[Episode]:
    return [make_episode(f"Episode {n}", n) for n in range(1, 4)]


@pytest.fixture
def feed(episodes: list[Episode]) -> Feed:
    return Feed(name="Sample Show", url="https://example.com/feed.xml", episodes=episodes)  # type: ignore[arg-type]


@pytest.fixture
def empty_feed() -> Feed:
    return Feed(name="Empty Show", url="https://example.com/empty.xml")  # type: ignore[arg-type]


@pytest.fixture
def engine_factory() -> FakeEngineFactory:
    return FakeEngineFactory(duration=100.0)


@pytest.fixture
def controller(engine_factory: FakeEngineFactory) -> PlaybackController:
    return PlaybackController(engine_factory=engine_factory, rng=random.Random(42))


@pytest.fixture
def sample_config_dict() -> dict:
    return {
        "version": "1",
        "log_level": "INFO",
        "playback": {"tick_interval_seconds": 0.5},
        "fetch": {"timeout_seconds": 10, "max_concurrent_fetches": 2},
        "default_feeds": [
            {"name": "Sample Show", "url": "https://example.com/feed.xml"},
        ],
    }
