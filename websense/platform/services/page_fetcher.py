from typing import Optional

import httpx

from websense.platform.config import settings
from websense.platform.exceptions import PageFetchError
from websense.platform.logger import get_logger

logger = get_logger("page_fetcher")

USER_AGENT = "Mozilla/5.0 (compatible; WebSenseBot/1.0)"


class PageFetcher:
    """
    Thin httpx wrapper used to fetch the site under analysis.

    A custom ``transport`` can be supplied (tests pass an
    ``httpx.MockTransport``).
    """

    def __init__(
        self,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.timeout = timeout if timeout is not None else settings.HTTP_TIMEOUT
        self.transport = transport

    def _client(self, follow_redirects: bool) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=self.timeout,
            follow_redirects=follow_redirects,
            transport=self.transport,
            headers={"User-Agent": USER_AGENT},
        )

    async def fetch(self, url: str, follow_redirects: bool = False) -> httpx.Response:
        """
        GET ``url`` and return the full response.

        Raises:
            PageFetchError: on timeouts and connection/protocol errors.
                HTTP error statuses are NOT errors here; callers inspect them.
        """
        try:
            async with self._client(follow_redirects) as client:
                response = await client.get(url)
        except httpx.TimeoutException as e:
            logger.warning(f"Timed out fetching {url}: {e!r}")
            raise PageFetchError(f"Request timeout after {self.timeout:g} seconds", timed_out=True) from e
        except (httpx.HTTPError, httpx.InvalidURL, ValueError) as e:
            logger.warning(f"Failed to fetch {url}: {e!r}")
            raise PageFetchError(str(e) or e.__class__.__name__) from e

        logger.info(f"Fetched {url}: {response.status_code} ({len(response.content)} bytes)")
        return response
