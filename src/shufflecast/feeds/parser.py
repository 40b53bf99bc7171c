"""Streaming RSS parser.

Episodes are extracted in a single pass over tokenizer events; no document
tree is built, so memory stays flat however long the feed is. The tokenizer is
defusedxml's hardened expat parser, which refuses entity expansion and
external references.

Character data is routed by the most recently opened element (last start
wins). Nested elements sharing a name are not told apart, and text that
follows a nested child inside ``title`` or ``description`` is not collected.
"""

import logging

from defusedxml import DefusedXmlException
from defusedxml.ElementTree import ParseError, XMLParser
from pydantic import AnyUrl, ValidationError

from shufflecast.feeds.models import Episode
from shufflecast.utils.errors import FeedParseError

logger = logging.getLogger(__name__)

ITUNES_NS = "http://www.itunes.com/dtds/podcast-1.0.dtd"
ITUNES_IMAGE = f"{{{ITUNES_NS}}}image"

# Parse in slices so a large document is handed to expat incrementally
CHUNK_SIZE = 64 * 1024


def parse_uri(value: str | None) -> AnyUrl | None:
    """Return value as an absolute URI, or None if it is not one."""
    if not value:
        return None
    try:
        return AnyUrl(value.strip())
    except ValidationError:
        return None


class _EpisodeDraft:
    """Accumulates one ``item`` until its closing tag."""

    def __init__(self) -> None:
        self.title: list[str] = []
        self.description: list[str] = []
        self.audio_url: str | None = None
        self.artwork_url: str | None = None


class _FeedTarget:
    """Parser target receiving start/end/data events from expat."""

    def __init__(self, podcast_name: str) -> None:
        self.podcast_name = podcast_name
        self.episodes: list[Episode] = []
        self.dropped = 0

        self._current: str | None = None
        self._draft: _EpisodeDraft | None = None
        self._channel_title: list[str] = []
        self._channel_title_closed = False
        self._channel_artwork: str | None = None

    def start(self, tag: str, attrib: dict[str, str]) -> None:
        self._current = tag

        if tag == "item":
            self._draft = _EpisodeDraft()
        elif tag == "enclosure":
            if self._draft is not None and "url" in attrib:
                self._draft.audio_url = attrib["url"]
        elif tag == ITUNES_IMAGE:
            href = attrib.get("href")
            if self._draft is not None:
                self._draft.artwork_url = href
            elif self._channel_artwork is None:
                self._channel_artwork = href

    def data(self, text: str) -> None:
        if self._current == "title":
            if self._draft is not None:
                self._draft.title.append(text)
            elif not self._channel_title_closed:
                self._channel_title.append(text)
        elif self._current == "description" and self._draft is not None:
            self._draft.description.append(text)

    def end(self, tag: str) -> None:
        self._current = None
        if tag == "title" and self._draft is None:
            # Later titles outside items belong to <image> and the like
            self._channel_title_closed = True
        if tag == "item" and self._draft is not None:
            self._finalize(self._draft)
            self._draft = None

    def close(self) -> list[Episode]:
        return self.episodes

    def _finalize(self, draft: _EpisodeDraft) -> None:
        title = "".join(draft.title).strip()
        audio_url = parse_uri(draft.audio_url)
        if audio_url is None:
            self.dropped += 1
            logger.debug(f"Dropping item without usable enclosure: {title!r}")
            return

        artwork_url = parse_uri(draft.artwork_url) or parse_uri(self._channel_artwork)
        self.episodes.append(
            Episode(
                title=title,
                description="".join(draft.description).strip(),
                audio_url=audio_url,
                podcast_name=self.podcast_name or "".join(self._channel_title).strip(),
                artwork_url=artwork_url,
            )
        )


class RSSParser:
    """Parses RSS feed bytes into an ordered list of episodes.

    Each call to :meth:`parse` is independent; the parser keeps no state
    between documents.

    Example:
        >>> episodes = RSSParser().parse(feed_bytes, podcast_name="My Show")
        >>> [e.title for e in episodes]
    """

    def parse(self, data: bytes, podcast_name: str = "") -> list[Episode]:
        """Parse RSS bytes.

        Items without a resolvable enclosure URL are skipped rather than
        failing the whole document. Episodes keep document order and are not
        deduplicated.

        Args:
            data: Raw feed bytes
            podcast_name: Name stamped on every episode. Falls back to the
                channel title when empty.

        Returns:
            Episodes in the order their ``item`` elements closed

        Raises:
            FeedParseError: If the markup is malformed beyond recovery
        """
        target = _FeedTarget(podcast_name)
        parser = XMLParser(target=target)

        try:
            for offset in range(0, len(data), CHUNK_SIZE):
                parser.feed(data[offset : offset + CHUNK_SIZE])
            episodes = parser.close()
        except ParseError as e:
            raise FeedParseError(f"Malformed feed markup: {e}") from e
        except DefusedXmlException as e:
            raise FeedParseError(f"Feed uses forbidden XML constructs: {e}") from e

        if target.dropped:
            logger.info(
                f"Parsed {len(episodes)} episodes, skipped {target.dropped} without enclosure"
            )
        else:
            logger.debug(f"Parsed {len(episodes)} episodes")
        return episodes
