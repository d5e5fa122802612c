import re
from typing import Callable, Optional, Tuple

from websense.features.mobile_friendly.schemas.mobile_friendly import (
    NOT_MOBILE_FRIENDLY,
    MobileFriendlyReport,
    MobileFriendlyResult,
)
from websense.platform.exceptions import AnalysisError
from websense.platform.logger import get_logger
from websense.platform.services.page_fetcher import PageFetcher
from websense.platform.utils.timestamps import utc_timestamp

logger = get_logger("mobile_friendly")

SMALL_FONT_RE = re.compile(r"font-size:\s*(1[0-5]px|[0-9]px)")
ZERO_PADDING_RE = re.compile(r"padding:\s*0(px)?")


def _missing_viewport(html: str) -> bool:
    return "<meta" not in html or 'name="viewport"' not in html or "width=device-width" not in html


def _no_responsive_css(html: str) -> bool:
    return not ("@media" in html or "max-width" in html or "min-width" in html)


def _fixed_width_content(html: str) -> bool:
    return "width=" in html and "px" in html


def _small_text(html: str) -> bool:
    return "font-size:" in html and SMALL_FONT_RE.search(html) is not None


def _cramped_tap_targets(html: str) -> bool:
    return "padding:" in html and ZERO_PADDING_RE.search(html) is not None


def _uses_plugins(html: str) -> bool:
    return "<object" in html or ".swf" in html or "flash" in html


# (detail flag, check over lowercased html, issue text, recommendation)
HEURISTICS: Tuple[Tuple[str, Callable[[str], bool], str, str], ...] = (
    ("viewport", _missing_viewport, "Viewport not set",
     'Add viewport meta tag: <meta name="viewport" content="width=device-width, initial-scale=1.0">'),
    ("responsive_design", _no_responsive_css, "No responsive design detected",
     "Implement responsive design using CSS media queries"),
    ("content_width", _fixed_width_content, "Content wider than screen",
     "Use flexible layouts with percentage-based widths"),
    ("text_size", _small_text, "Text too small to read",
     "Use larger font sizes (minimum 16px) for mobile readability"),
    ("clickable_elements", _cramped_tap_targets, "Clickable elements too close",
     "Ensure clickable elements have adequate spacing (minimum 44px)"),
    ("plugins", _uses_plugins, "Incompatible plugins detected",
     "Remove or replace Flash and other incompatible plugins"),
)


def evaluate_html(html: str) -> MobileFriendlyReport:
    """Sniff raw HTML for common mobile usability problems."""
    html = (html or "").lower()
    report = MobileFriendlyReport()

    for flag, check, issue, recommendation in HEURISTICS:
        if check(html):
            report.issues.append(issue)
            report.recommendations.append(recommendation)
            setattr(report.details, flag, True)

    if report.issues:
        report.verdict = NOT_MOBILE_FRIENDLY
    return report


class MobileFriendlyService:
    def __init__(self, fetcher: Optional[PageFetcher] = None):
        self.fetcher = fetcher or PageFetcher()

    async def analyze(self, url: str) -> MobileFriendlyResult:
        logger.info(f"Starting mobile-friendly analysis for: {url}")

        try:
            response = await self.fetcher.fetch(url, follow_redirects=True)
        except AnalysisError as e:
            logger.error(f"Heuristic mobile-friendly analysis failed: {e}")
            raise AnalysisError("Unable to analyze page content") from e

        report = evaluate_html(response.text)
        logger.info(f"Mobile-friendly analysis completed for {url}: {report.verdict}")
        return MobileFriendlyResult(url=url, timestamp=utc_timestamp(), **dict(report))


def get_mobile_friendly_service() -> MobileFriendlyService:
    return MobileFriendlyService()
