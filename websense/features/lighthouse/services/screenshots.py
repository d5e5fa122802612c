"""
Screenshot timeline reconstruction from a Lighthouse report.

Lighthouse exposes page captures in several places depending on version
(``screenshots``, ``filmstrip``, the ``screenshot-thumbnails`` audit and the
``final-screenshot`` audit). They are merged into one chronological list,
de-duplicated per 100 ms bucket and tagged with a loading phase.
"""
from typing import Any, Dict, Iterable, List, Optional

from websense.features.lighthouse.schemas.lighthouse import Screenshot, TimelineContext
from websense.platform.logger import get_logger
from websense.platform.utils.timestamps import epoch_millis, round_half_up

logger = get_logger("lighthouse_screenshots")

DEFAULT_WIDTH = 1200
DEFAULT_HEIGHT = 800


def loading_phase(timestamp: float) -> str:
    if timestamp < 1000:
        return "initial"
    if timestamp < 3000:
        return "early"
    if timestamp < 8000:
        return "loading"
    if timestamp < 15000:
        return "late"
    return "complete"


def strip_data_url(data: Any) -> Optional[str]:
    """Return the bare base64 payload, or None when there is nothing usable."""
    if not isinstance(data, str):
        return None
    if data.startswith("data:image/"):
        parts = data.split(",", 1)
        data = parts[1] if len(parts) == 2 else ""
    return data or None


def _frame(
    frame_id, index: int, timestamp: Any, data: Any, width: Any, height: Any, label: str
) -> Optional[Screenshot]:
    payload = strip_data_url(data)
    if payload is None:
        logger.warning(f"Screenshot {frame_id} has no usable base64 data")
        return None

    timestamp = timestamp or index * 1000
    return Screenshot(
        id=frame_id,
        timestamp=timestamp,
        data=payload,
        width=width or DEFAULT_WIDTH,
        height=height or DEFAULT_HEIGHT,
        description=f"{label} at {timestamp / 1000:.1f}s",
        phase=loading_phase(timestamp),
    )


def _from_screenshots(items: Iterable[Dict[str, Any]]) -> List[Screenshot]:
    frames = []
    for index, shot in enumerate(items):
        if not isinstance(shot, dict) or not shot.get("data"):
            continue
        frame = _frame(
            index, index, shot.get("timestamp"), shot["data"],
            shot.get("width"), shot.get("height"), "Loading",
        )
        if frame:
            frames.append(frame)
    return frames


def _from_filmstrip(items: Iterable[Dict[str, Any]]) -> List[Screenshot]:
    frames = []
    for index, item in enumerate(items):
        shot = item.get("screenshot") if isinstance(item, dict) else None
        if not isinstance(shot, dict) or not shot.get("data"):
            continue
        frame = _frame(
            f"filmstrip-{index}", index, item.get("timestamp"), shot["data"],
            shot.get("width"), shot.get("height"), "Filmstrip",
        )
        if frame:
            frames.append(frame)
    return frames


def _from_thumbnails(details: Dict[str, Any]) -> List[Screenshot]:
    frames = []
    width = details.get("width")
    height = details.get("height")
    for index, item in enumerate(details.get("items") or []):
        if not isinstance(item, dict) or not item.get("data"):
            continue
        # `timing` is ms since navigation start; `timestamp` is a trace clock
        frame = _frame(
            f"thumbnail-{index}", index, item.get("timing"), item["data"],
            width, height, "Thumbnail",
        )
        if frame:
            frames.append(frame)
    return frames


def _final_screenshot(details: Dict[str, Any], now_ms: int) -> Optional[Screenshot]:
    payload = strip_data_url(details.get("data"))
    if payload is None:
        return None
    return Screenshot(
        id="final",
        timestamp=now_ms,
        data=payload,
        width=details.get("width") or DEFAULT_WIDTH,
        height=details.get("height") or DEFAULT_HEIGHT,
        description="Final loaded page",
        phase="complete",
    )


def remove_duplicates(screenshots: List[Screenshot]) -> List[Screenshot]:
    """Keep the first screenshot of every 100 ms bucket."""
    seen = set()
    unique = []
    for shot in screenshots:
        key = round_half_up(shot.timestamp / 100)
        if key in seen:
            continue
        seen.add(key)
        unique.append(shot)
    return unique


def timeline_metrics(report: Dict[str, Any]) -> TimelineContext:
    audits = report.get("audits") or {}

    def numeric(key: str) -> Optional[float]:
        return (audits.get(key) or {}).get("numericValue") or None

    breakdown = ((audits.get("mainthread-work-breakdown") or {}).get("details") or {}).get("items") or []
    dom_content_loaded = breakdown[0].get("duration") if breakdown else None

    return TimelineContext(
        first_contentful_paint=numeric("first-contentful-paint"),
        largest_contentful_paint=numeric("largest-contentful-paint"),
        speed_index=numeric("speed-index"),
        time_to_interactive=numeric("interactive"),
        first_meaningful_paint=numeric("first-meaningful-paint"),
        dom_content_loaded=dom_content_loaded or None,
    )


def describe_from_metrics(screenshot: Screenshot, metrics: TimelineContext) -> str:
    ts = screenshot.timestamp
    if not metrics.first_contentful_paint or ts < metrics.first_contentful_paint:
        return "Initial page load state"
    if metrics.largest_contentful_paint and ts >= metrics.largest_contentful_paint:
        return "Fully loaded page (post-LCP)"
    if metrics.speed_index and ts >= metrics.speed_index:
        return "Page mostly loaded (post-Speed Index)"
    return "Content visible (post-FCP)"


def phase_from_metrics(metrics: TimelineContext) -> str:
    if metrics.time_to_interactive and metrics.largest_contentful_paint:
        return "complete"
    if metrics.largest_contentful_paint:
        return "late"
    if metrics.first_contentful_paint:
        return "loading"
    return "initial"


def extract_screenshots(report: Dict[str, Any], now_ms: Optional[int] = None) -> List[Screenshot]:
    """Build the loading timeline. Any malformed section yields an empty list."""
    try:
        screenshots: List[Screenshot] = []
        audits = report.get("audits") or {}

        screenshots.extend(_from_screenshots(report.get("screenshots") or []))
        screenshots.extend(_from_filmstrip(report.get("filmstrip") or []))

        thumbnails = (audits.get("screenshot-thumbnails") or {}).get("details")
        if isinstance(thumbnails, dict):
            screenshots.extend(_from_thumbnails(thumbnails))

        final_details = (audits.get("final-screenshot") or {}).get("details")
        if isinstance(final_details, dict):
            final = _final_screenshot(final_details, now_ms if now_ms is not None else epoch_millis())
            if final:
                screenshots.append(final)

        screenshots.sort(key=lambda shot: shot.timestamp)
        unique = remove_duplicates(screenshots)

        if len(unique) == 1:
            single = unique[0]
            metrics = timeline_metrics(report)
            single.description = describe_from_metrics(single, metrics)
            single.phase = phase_from_metrics(metrics)
            single.timeline_context = metrics
            logger.info(f"Single screenshot enhanced with timeline context: {single.description}")

        logger.info(f"Extracted screenshots: {len(unique)}")
        return unique

    except Exception as e:
        logger.error(f"Error extracting screenshots: {e}", exc_info=True)
        return []
