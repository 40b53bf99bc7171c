"""Subscribed feeds and their cached episode lists."""

import asyncio
import logging
import random
from dataclasses import dataclass
from uuid import UUID

from pydantic import ValidationError

from shufflecast.config.schema import GlobalConfig
from shufflecast.feeds.fetcher import FeedFetcher
from shufflecast.feeds.models import Episode, Feed
from shufflecast.feeds.parser import RSSParser
from shufflecast.utils.errors import (
    DuplicateFeedError,
    FeedError,
    FeedNotFoundError,
    FeedParseError,
    FetchError,
)

logger = logging.getLogger(__name__)

DEFAULT_MAX_CONCURRENT_FETCHES = 5


@dataclass
class FetchResult:
    """Outcome of refreshing a single feed."""

    feed: Feed
    success: bool
    episode_count: int = 0
    error: str | None = None


class FeedStore:
    """Holds subscriptions and refreshes them through the fetcher and parser.

    Refreshing replaces a feed's episode list wholesale. A failed refresh
    leaves the previous list in place. Feeds refresh independently, and a
    response that arrives late simply overwrites whatever is there.
    """

    def __init__(
        self,
        fetcher: FeedFetcher | None = None,
        parser: RSSParser | None = None,
        max_concurrent_fetches: int = DEFAULT_MAX_CONCURRENT_FETCHES,
    ) -> None:
        self.fetcher = fetcher or FeedFetcher()
        self.parser = parser or RSSParser()
        self.max_concurrent_fetches = max_concurrent_fetches
        self._feeds: dict[UUID, Feed] = {}

    @classmethod
    def from_config(
        cls, config: GlobalConfig, fetcher: FeedFetcher | None = None
    ) -> "FeedStore":
        """Build a store subscribed to the configured default feeds."""
        store = cls(
            fetcher=fetcher or FeedFetcher(config.fetch),
            max_concurrent_fetches=config.fetch.max_concurrent_fetches,
        )
        for feed_config in config.default_feeds:
            store.add_feed(feed_config.name, str(feed_config.url))
        return store

    @property
    def feeds(self) -> list[Feed]:
        """Subscribed feeds in subscription order."""
        return list(self._feeds.values())

    def add_feed(self, name: str, url: str) -> Feed:
        """Subscribe to a feed.

        Raises:
            FeedError: If the URL is not a valid http(s) URL
            DuplicateFeedError: If the URL is already subscribed
        """
        try:
            feed = Feed(name=name, url=url)  # type: ignore[arg-type]
        except ValidationError as e:
            raise FeedError(f"Invalid feed URL '{url}': {e}") from e
        for existing in self._feeds.values():
            if str(existing.url) == str(feed.url):
                raise DuplicateFeedError(f"Feed '{url}' is already subscribed as '{existing.name}'")

        self._feeds[feed.id] = feed
        logger.info(f"Subscribed to feed '{name}'")
        return feed

    def remove_feed(self, feed_id: UUID) -> None:
        """Unsubscribe from a feed.

        Raises:
            FeedNotFoundError: If no such feed is subscribed
        """
        if feed_id not in self._feeds:
            raise FeedNotFoundError(f"Feed {feed_id} not found")
        feed = self._feeds.pop(feed_id)
        logger.info(f"Unsubscribed from feed '{feed.name}'")

    def get_feed(self, feed_id: UUID) -> Feed:
        """Look up a subscribed feed.

        Raises:
            FeedNotFoundError: If no such feed is subscribed
        """
        try:
            return self._feeds[feed_id]
        except KeyError:
            raise FeedNotFoundError(f"Feed {feed_id} not found") from None

    async def refresh(self, feed: Feed) -> FetchResult:
        """Fetch and parse one feed, replacing its episodes on success.

        Fetch and parse failures are logged and reported in the result; the
        feed keeps its previous episodes.
        """
        try:
            data = await self.fetcher.fetch(str(feed.url))
            episodes = self.parser.parse(data, podcast_name=feed.name)
        except (FetchError, FeedParseError) as e:
            logger.warning(f"Keeping cached episodes for '{feed.name}': {e}")
            return FetchResult(
                feed=feed,
                success=False,
                episode_count=len(feed.episodes),
                error=str(e),
            )

        feed.replace_episodes(episodes)
        logger.info(f"Refreshed '{feed.name}': {len(episodes)} episodes")
        return FetchResult(feed=feed, success=True, episode_count=len(episodes))

    async def refresh_all(self) -> list[FetchResult]:
        """Refresh every subscribed feed concurrently."""
        semaphore = asyncio.Semaphore(self.max_concurrent_fetches)

        async def refresh_with_limit(feed: Feed) -> FetchResult:
            async with semaphore:
                return await self.refresh(feed)

        tasks = [refresh_with_limit(feed) for feed in self.feeds]
        return list(await asyncio.gather(*tasks))


def random_episode(feed: Feed, rng: random.Random | None = None) -> Episode | None:
    """Pick an episode uniformly at random, or None for an empty feed."""
    if not feed.episodes:
        return None
    return (rng or random).choice(feed.episodes)
