"""Tests for FeedStore."""

import asyncio
import random
from unittest.mock import AsyncMock, Mock

import pytest

from shufflecast.config.schema import GlobalConfig
from shufflecast.feeds.models import Episode, Feed
from shufflecast.feeds.store import FeedStore, random_episode
from shufflecast.utils.errors import (
    DuplicateFeedError,
    FeedError,
    FeedNotFoundError,
    FetchError,
    FetchStatusError,
)


def feed_bytes(*titles: str) -> bytes:
    items = "".join(
        f'<item><title>{t}</title><enclosure url="https://example.com/{n}.mp3"/></item>'
        for n, t in enumerate(titles)
    )
    return f"<rss><channel>{items}</channel></rss>".encode()


class TestSubscriptions:
    """Tests for adding, removing and looking up feeds."""

    def test_add_feed(self) -> None:
        store = FeedStore(fetcher=Mock())

        feed = store.add_feed("Show", "https://example.com/feed.xml")

        assert store.feeds == [feed]
        assert store.get_feed(feed.id) is feed
        assert feed.episodes == []

    def test_add_duplicate_url_raises(self) -> None:
        store = FeedStore(fetcher=Mock())
        store.add_feed("Show", "https://example.com/feed.xml")

        with pytest.raises(DuplicateFeedError):
            store.add_feed("Again", "https://example.com/feed.xml")

    @pytest.mark.parametrize("url", ["not a url", "", "ftp://example.com/feed.xml"])
    def test_add_invalid_url_raises(self, url: str) -> None:
        """Test an unusable feed URL is rejected as a feed error."""
        store = FeedStore(fetcher=Mock())

        with pytest.raises(FeedError, match="Invalid feed URL"):
            store.add_feed("Bad", url)

        assert store.feeds == []

    def test_feeds_keep_subscription_order(self) -> None:
        store = FeedStore(fetcher=Mock())
        names = ["B", "A", "C"]
        for name in names:
            store.add_feed(name, f"https://example.com/{name}.xml")

        assert [f.name for f in store.feeds] == names

    def test_remove_feed(self) -> None:
        store = FeedStore(fetcher=Mock())
        feed = store.add_feed("Show", "https://example.com/feed.xml")

        store.remove_feed(feed.id)

        assert store.feeds == []
        with pytest.raises(FeedNotFoundError):
            store.get_feed(feed.id)

    def test_remove_unknown_feed_raises(self, feed: Feed) -> None:
        with pytest.raises(FeedNotFoundError):
            FeedStore(fetcher=Mock()).remove_feed(feed.id)

    def test_from_config(self, sample_config_dict: dict) -> None:
        """Test default feeds from config are subscribed."""
        config = GlobalConfig(**sample_config_dict)

        store = FeedStore.from_config(config)

        assert [f.name for f in store.feeds] == ["Sample Show"]
        assert store.max_concurrent_fetches == 2
        assert store.fetcher.config.timeout_seconds == 10


class TestRefresh:
    """Tests for FeedStore.refresh and refresh_all."""

    @pytest.mark.asyncio
    async def test_refresh_replaces_episodes(self) -> None:
        fetcher = Mock()
        fetcher.fetch = AsyncMock(return_value=feed_bytes("One", "Two"))
        store = FeedStore(fetcher=fetcher)
        feed = store.add_feed("Show", "https://example.com/feed.xml")

        result = await store.refresh(feed)

        assert result.success
        assert result.episode_count == 2
        assert [e.title for e in feed.episodes] == ["One", "Two"]
        assert all(e.podcast_name == "Show" for e in feed.episodes)
        fetcher.fetch.assert_awaited_once_with("https://example.com/feed.xml")

    @pytest.mark.asyncio
    async def test_second_refresh_does_not_merge(self) -> None:
        fetcher = Mock()
        fetcher.fetch = AsyncMock(side_effect=[feed_bytes("One", "Two"), feed_bytes("Three")])
        store = FeedStore(fetcher=fetcher)
        feed = store.add_feed("Show", "https://example.com/feed.xml")

        await store.refresh(feed)
        await store.refresh(feed)

        assert [e.title for e in feed.episodes] == ["Three"]

    @pytest.mark.asyncio
    async def test_fetch_failure_keeps_previous_episodes(self, feed: Feed) -> None:
        fetcher = Mock()
        fetcher.fetch = AsyncMock(side_effect=FetchStatusError(500, "HTTP 500"))
        store = FeedStore(fetcher=fetcher)
        before = list(feed.episodes)

        result = await store.refresh(feed)

        assert not result.success
        assert result.error == "HTTP 500"
        assert result.episode_count == len(before)
        assert feed.episodes == before

    @pytest.mark.asyncio
    async def test_parse_failure_keeps_previous_episodes(self, feed: Feed) -> None:
        fetcher = Mock()
        fetcher.fetch = AsyncMock(return_value=b"<rss><channel>")
        store = FeedStore(fetcher=fetcher)
        before = list(feed.episodes)

        result = await store.refresh(feed)

        assert not result.success
        assert feed.episodes == before

    @pytest.mark.asyncio
    async def test_refresh_all_isolates_failures(self) -> None:
        async def fetch(url: str) -> bytes:
            if "broken" in url:
                raise FetchError("connection refused")
            return feed_bytes("Ep")

        fetcher = Mock()
        fetcher.fetch = fetch
        store = FeedStore(fetcher=fetcher)
        good = store.add_feed("Good", "https://example.com/good.xml")
        bad = store.add_feed("Broken", "https://example.com/broken.xml")

        results = await store.refresh_all()

        assert [r.success for r in results] == [True, False]
        assert len(good.episodes) == 1
        assert bad.episodes == []

    @pytest.mark.asyncio
    async def test_refresh_all_bounds_concurrency(self) -> None:
        in_flight = 0
        peak = 0

        async def fetch(url: str) -> bytes:
            nonlocal in_flight, peak
            in_flight += 1
            peak = max(peak, in_flight)
            await asyncio.sleep(0.01)
            in_flight -= 1
            return feed_bytes("Ep")

        fetcher = Mock()
        fetcher.fetch = fetch
        store = FeedStore(fetcher=fetcher, max_concurrent_fetches=2)
        for n in range(5):
            store.add_feed(f"Show {n}", f"https://example.com/{n}.xml")

        results = await store.refresh_all()

        assert all(r.success for r in results)
        assert peak == 2


class TestRandomEpisode:
    """Tests for random_episode."""

    def test_empty_feed_returns_none(self, empty_feed: Feed) -> None:
        assert random_episode(empty_feed) is None

    def test_single_episode_always_selected(self) -> None:
        only = Episode(title="Only", audio_url="https://example.com/a.mp3")  # type: ignore[arg-type]
        feed = Feed(name="One", url="https://example.com/f.xml", episodes=[only])  # type: ignore[arg-type]

        assert all(random_episode(feed, random.Random(n)) is only for n in range(20))

    def test_seeded_rng_is_reproducible(self, feed: Feed) -> None:
        first = [random_episode(feed, random.Random(7)) for _ in range(5)]
        second = [random_episode(feed, random.Random(7)) for _ in range(5)]

        assert first == second
