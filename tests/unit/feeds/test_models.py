"""Tests for feed and episode models."""

import pytest
from pydantic import ValidationError

from shufflecast.feeds.models import Episode, Feed


class TestEpisode:
    """Tests for Episode model."""

    def test_generates_unique_ids(self) -> None:
        """Test each episode gets its own identity."""
        a = Episode(title="A", audio_url="https://example.com/a.mp3")  # type: ignore[arg-type]
        b = Episode(title="A", audio_url="https://example.com/a.mp3")  # type: ignore[arg-type]

        assert a.id != b.id

    def test_is_immutable(self) -> None:
        """Test episodes cannot be modified after construction."""
        episode = Episode(title="A", audio_url="https://example.com/a.mp3")  # type: ignore[arg-type]

        with pytest.raises(ValidationError):
            episode.title = "B"  # type: ignore[misc]

    def test_rejects_invalid_audio_url(self) -> None:
        """Test audio location must be a URI."""
        with pytest.raises(ValidationError):
            Episode(title="A", audio_url="not a url")  # type: ignore[arg-type]


class TestFeed:
    """Tests for Feed model."""

    def test_replace_episodes_is_wholesale(self, feed: Feed) -> None:
        """Test replacing drops every previous episode."""
        new = Episode(title="New", audio_url="https://example.com/new.mp3")  # type: ignore[arg-type]

        feed.replace_episodes([new])

        assert feed.episodes == [new]

    def test_is_empty(self, feed: Feed, empty_feed: Feed) -> None:
        assert not feed.is_empty
        assert empty_feed.is_empty
