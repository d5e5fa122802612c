from typing import Optional

from websense.features.site_probe.schemas.site_probe import SiteProbeResult
from websense.platform.exceptions import PageFetchError
from websense.platform.logger import get_logger
from websense.platform.services.page_fetcher import PageFetcher

logger = get_logger("site_probe")


def is_accessible(status_code: int) -> bool:
    return 200 <= status_code < 400


class SiteProbeService:
    """Reachability check used by the frontend before launching a full analysis."""

    def __init__(self, fetcher: Optional[PageFetcher] = None):
        self.fetcher = fetcher or PageFetcher()

    async def probe(self, url: str) -> SiteProbeResult:
        logger.info(f"Testing website accessibility: {url}")
        try:
            response = await self.fetcher.fetch(url, follow_redirects=False)
        except PageFetchError as e:
            logger.warning(f"Website {url} is not accessible: {e}")
            if e.timed_out:
                message = f"Website connection timed out after {self.fetcher.timeout:g} seconds"
            else:
                message = f"Website is not accessible: {e}"
            return SiteProbeResult(url=url, message=message)

        return SiteProbeResult(
            url=url,
            status_code=response.status_code,
            accessible=is_accessible(response.status_code),
            message=f"Website responded with status code: {response.status_code}",
        )


def get_site_probe_service() -> SiteProbeService:
    return SiteProbeService()
