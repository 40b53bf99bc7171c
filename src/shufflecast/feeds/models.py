"""Data models for podcast episodes and feeds."""

from uuid import UUID, uuid4

from pydantic import AnyUrl, BaseModel, ConfigDict, Field, HttpUrl


class Episode(BaseModel):
    """Represents a single podcast episode.

    Episodes are immutable; a fresh ``id`` is generated each time one is built,
    so re-parsing a feed yields new identities even for the same enclosure.
    """

    model_config = ConfigDict(frozen=True)

    id: UUID = Field(default_factory=uuid4)
    title: str
    description: str = ""
    audio_url: AnyUrl  # Enclosure URL handed to the player engine
    podcast_name: str = ""
    artwork_url: AnyUrl | None = None


class Feed(BaseModel):
    """A subscribed podcast feed and its most recently parsed episodes."""

    id: UUID = Field(default_factory=uuid4)
    name: str
    url: HttpUrl
    episodes: list[Episode] = Field(default_factory=list)

    def replace_episodes(self, episodes: list[Episode]) -> None:
        """Swap in the result of a successful parse, discarding the old list."""
        self.episodes = list(episodes)

    @property
    def is_empty(self) -> bool:
        return not self.episodes
