"""HTTP retrieval of feed documents."""

import logging

import httpx

from shufflecast.config.schema import FetchConfig
from shufflecast.utils.errors import FetchError, FetchStatusError, FetchTimeoutError

logger = logging.getLogger(__name__)


class FeedFetcher:
    """Fetches raw feed bytes over HTTP.

    Failures are never retried here; deciding when to fetch again is left to
    the caller.
    """

    def __init__(
        self,
        config: FetchConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the fetcher.

        Args:
            config: Timeout and user agent settings
            transport: Optional httpx transport (tests pass ``httpx.MockTransport``)
        """
        self.config = config or FetchConfig()
        self._transport = transport

    async def fetch(self, url: str) -> bytes:
        """Download a feed document.

        Args:
            url: Feed URL

        Returns:
            Response body

        Raises:
            FetchTimeoutError: If the request timed out
            FetchStatusError: If the server answered with a non-2xx status
            FetchError: For any other transport failure
        """
        logger.debug(f"Fetching feed: {url}")
        try:
            async with httpx.AsyncClient(
                timeout=self.config.timeout_seconds,
                headers={"User-Agent": self.config.user_agent},
                follow_redirects=True,
                transport=self._transport,
            ) as client:
                response = await client.get(url)
        except httpx.TimeoutException as e:
            raise FetchTimeoutError(
                f"Feed request timed out after {self.config.timeout_seconds} seconds: {url}"
            ) from e
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise FetchError(f"Failed to fetch feed {url}: {e}") from e

        if not response.is_success:
            raise FetchStatusError(
                response.status_code,
                f"Feed {url} returned HTTP {response.status_code}",
            )

        return response.content
