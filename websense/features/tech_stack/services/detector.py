import threading
from typing import Any, Dict, List, Optional

from fastapi.concurrency import run_in_threadpool
from Wappalyzer import Wappalyzer, WebPage

from websense.features.tech_stack.schemas.tech_stack import Technology, TechStackResult
from websense.features.tech_stack.utils.categories import categorize_technologies
from websense.platform.logger import get_logger
from websense.platform.services.page_fetcher import PageFetcher
from websense.platform.utils.timestamps import utc_timestamp

logger = get_logger("tech_stack_detector")

_engine: Optional[Wappalyzer] = None
_engine_lock = threading.Lock()


def get_engine() -> Wappalyzer:
    """Load the fingerprint database once per process."""
    global _engine
    with _engine_lock:
        if _engine is None:
            logger.info("Loading Wappalyzer fingerprint database")
            _engine = Wappalyzer.latest()
    return _engine


def normalize_detections(raw: Dict[str, Dict[str, Any]]) -> List[Technology]:
    """
    Convert ``analyze_with_versions_and_categories`` output, e.g.
    ``{"jQuery": {"versions": ["3.5.1"], "categories": ["JavaScript libraries"]}}``,
    into ``Technology`` entries.
    """
    technologies = []
    for name, info in (raw or {}).items():
        info = info or {}
        versions = info.get("versions") or []
        categories = info.get("categories") or []
        technologies.append(
            Technology(
                name=name,
                version=versions[0] if versions else "Unknown",
                confidence=int(info.get("confidence") or 0),
                category=", ".join(categories) if categories else "Unknown",
                description=info.get("description") or "",
            )
        )
    return technologies


class TechStackService:
    def __init__(self, fetcher: Optional[PageFetcher] = None, engine: Optional[Wappalyzer] = None):
        self.fetcher = fetcher or PageFetcher()
        self.engine = engine

    async def analyze(self, url: str) -> TechStackResult:
        logger.info(f"Starting tech stack analysis for: {url}")

        response = await self.fetcher.fetch(url, follow_redirects=True)
        webpage = WebPage(
            str(response.url),
            response.text,
            {key.lower(): value for key, value in response.headers.items()},
        )

        engine = self.engine or await run_in_threadpool(get_engine)
        raw = await run_in_threadpool(engine.analyze_with_versions_and_categories, webpage)
        logger.info(f"Wappalyzer detected {len(raw)} technologies on {url}")

        breakdown = categorize_technologies(normalize_detections(raw))
        return TechStackResult(url=url, timestamp=utc_timestamp(), **dict(breakdown))


def get_tech_stack_service() -> TechStackService:
    return TechStackService()
