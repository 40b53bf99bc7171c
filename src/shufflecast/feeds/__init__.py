"""Feed management and RSS parsing for ShuffleCast."""

from shufflecast.feeds.fetcher import FeedFetcher
from shufflecast.feeds.models import Episode, Feed
from shufflecast.feeds.parser import RSSParser
from shufflecast.feeds.store import FeedStore, FetchResult, random_episode

__all__ = ["Episode", "Feed", "FeedFetcher", "FeedStore", "FetchResult", "RSSParser", "random_episode"]
