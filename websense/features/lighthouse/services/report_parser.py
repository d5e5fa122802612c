from typing import Any, Dict, List, Optional, Tuple

from websense.features.lighthouse.schemas.lighthouse import (
    AuditIssue,
    LighthouseResult,
    ResourceSummary,
    Suggestion,
)
from websense.features.lighthouse.services.screenshots import extract_screenshots
from websense.platform.logger import get_logger
from websense.platform.utils.timestamps import round_half_up

logger = get_logger("lighthouse_report_parser")

CATEGORY_KEYS = ("performance", "accessibility", "best-practices", "seo", "pwa")

# Opportunities are flagged below a perfect score, diagnostics below 0.9
OPPORTUNITY_AUDITS = (
    "unused-css-rules",
    "unused-javascript",
    "modern-image-formats",
    "offscreen-images",
    "render-blocking-resources",
    "unminified-css",
    "unminified-javascript",
    "efficient-animated-content",
    "duplicate-id-used",
    "total-byte-weight",
    "uses-optimized-images",
    "uses-text-compression",
    "uses-responsive-images",
    "preload-lcp-image",
)
DIAGNOSTIC_AUDITS = (
    "dom-size",
    "critical-request-chains",
    "server-response-time",
    "redirects",
    "uses-long-cache-ttl",
    "uses-http2",
    "uses-passive-event-listeners",
)

ACCESSIBILITY_KEYWORDS = ("aria", "alt", "button", "link", "form", "table", "heading", "color")
BEST_PRACTICES_KEYWORDS = (
    "https", "security", "deprecated", "document-write", "notification",
    "geolocation", "passive-listeners", "no-vulnerable-libraries",
)
SEO_KEYWORDS = (
    "meta", "headings", "robots", "canonical", "hreflang",
    "structured-data", "viewport", "charset", "doctype",
)

# result field -> audit id
DISPLAY_METRICS: Tuple[Tuple[str, str], ...] = (
    ("first_contentful_paint", "first-contentful-paint"),
    ("speed_index", "speed-index"),
    ("largest_contentful_paint", "largest-contentful-paint"),
    ("time_to_interactive", "interactive"),
    ("total_blocking_time", "total-blocking-time"),
    ("cumulative_layout_shift", "cumulative-layout-shift"),
    ("max_potential_fid", "max-potential-fid"),
    ("server_response_time", "server-response-time"),
    ("render_blocking_resources", "render-blocking-resources"),
    ("unused_css", "unused-css-rules"),
    ("unused_javascript", "unused-javascript"),
    ("modern_image_formats", "modern-image-formats"),
    ("image_optimization", "efficient-animated-content"),
)

CHROME_ERROR_MARKERS = ("chrome-error://", "ERR_", "This site can't be reached")

MAX_ITEMS = 10


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _percent(score: float) -> int:
    return round_half_up(score * 100)


class LighthouseReportParser:
    """Turns a raw Lighthouse JSON report into a ``LighthouseResult``."""

    @staticmethod
    def validate(report: Dict[str, Any]) -> Optional[str]:
        """
        Return a user-facing error message when the report cannot be used,
        or None when it is fit for parsing.
        """
        runtime_error = report.get("runtimeError")
        if runtime_error:
            message = runtime_error.get("message") if isinstance(runtime_error, dict) else None
            logger.error(f"Lighthouse analysis failed: {message or 'Unknown error'}")
            return message or "Failed to analyze website. The site may be down or inaccessible."

        final_screenshot = (report.get("audits") or {}).get("final-screenshot") or {}
        screenshot_data = (final_screenshot.get("details") or {}).get("data")
        if isinstance(screenshot_data, str) and any(m in screenshot_data for m in CHROME_ERROR_MARKERS):
            logger.error("Chrome interstitial error detected - website may be down or inaccessible")
            return (
                "Website appears to be down or inaccessible. "
                "Chrome is showing an error page instead of the website content."
            )

        categories = report.get("categories")
        if not categories or not report.get("audits"):
            logger.error("Lighthouse analysis returned invalid data structure")
            return "Analysis completed but returned invalid data structure."

        has_scores = any(
            isinstance(category, dict) and category.get("score") is not None
            for category in categories.values()
        )
        if not has_scores:
            logger.error("Lighthouse analysis returned no valid category scores")
            return "Analysis completed but no valid scores were returned. The site may not be accessible."

        return None

    @staticmethod
    def parse(url: str, report: Dict[str, Any]) -> LighthouseResult:
        audits = report["audits"]
        categories = report["categories"]

        performance_score = (categories.get("performance") or {}).get("score")
        metrics = {
            field: (audits.get(audit_id) or {}).get("displayValue") or "N/A"
            for field, audit_id in DISPLAY_METRICS
        }

        result = LighthouseResult(
            url=url,
            score=_percent(performance_score) if performance_score else 0,
            **metrics,
            categories=LighthouseReportParser.extract_category_scores(categories),
            resources=LighthouseReportParser.extract_resources(audits),
            suggestions=LighthouseReportParser.extract_suggestions(audits),
            accessibility_issues=LighthouseReportParser.extract_issues(
                audits, "Accessibility", ACCESSIBILITY_KEYWORDS, prefix="accessibility"
            ),
            best_practices_issues=LighthouseReportParser.extract_issues(
                audits, "Best Practices", BEST_PRACTICES_KEYWORDS
            ),
            seo_issues=LighthouseReportParser.extract_issues(audits, "SEO", SEO_KEYWORDS),
            screenshots=extract_screenshots(report),
        )

        logger.info(
            f"Parsed report for {url}: categories={result.categories} "
            f"suggestions={len(result.suggestions)} "
            f"a11y={len(result.accessibility_issues)} "
            f"best_practices={len(result.best_practices_issues)} "
            f"seo={len(result.seo_issues)} screenshots={len(result.screenshots)}"
        )
        return result

    @staticmethod
    def extract_category_scores(categories: Dict[str, Any]) -> Dict[str, int]:
        scores = {}
        for key in CATEGORY_KEYS:
            score = (categories.get(key) or {}).get("score")
            if _is_number(score):
                scores[key] = _percent(score)
            else:
                logger.info(f"Category {key} missing or has null score")
        return scores

    @staticmethod
    def extract_resources(audits: Dict[str, Any]) -> ResourceSummary:
        def item_count(audit_id: str) -> int:
            details = (audits.get(audit_id) or {}).get("details") or {}
            return len(details.get("items") or [])

        return ResourceSummary(
            total_requests=item_count("network-requests"),
            total_size=(audits.get("total-byte-weight") or {}).get("displayValue") or "N/A",
            image_count=item_count("image-elements"),
            script_count=item_count("scripts"),
            stylesheet_count=item_count("stylesheets"),
            font_count=item_count("font-display"),
        )

    @staticmethod
    def extract_suggestions(audits: Dict[str, Any]) -> List[Suggestion]:
        suggestions = []

        for audit_ids, threshold, default_savings in (
            (OPPORTUNITY_AUDITS, 1, "Improvement available"),
            (DIAGNOSTIC_AUDITS, 0.9, "Improvement recommended"),
        ):
            for audit_id in audit_ids:
                audit = audits.get(audit_id)
                if not isinstance(audit, dict) or not _is_number(audit.get("score")):
                    continue
                if audit["score"] >= threshold:
                    continue
                suggestions.append(
                    Suggestion(
                        title=audit.get("title"),
                        description=audit.get("description"),
                        score=_percent(audit["score"]),
                        savings=audit.get("displayValue") or default_savings,
                        details=audit.get("details"),
                    )
                )

        return suggestions[:MAX_ITEMS]

    @staticmethod
    def extract_issues(
        audits: Dict[str, Any],
        category: str,
        keywords: Tuple[str, ...],
        prefix: Optional[str] = None,
    ) -> List[AuditIssue]:
        """Failed audits (score < 1) whose id matches the category keywords."""
        issues = []
        for key, audit in audits.items():
            if not isinstance(audit, dict) or not _is_number(audit.get("score")):
                continue
            if audit["score"] >= 1:
                continue
            matches = (prefix is not None and key.startswith(prefix)) or any(k in key for k in keywords)
            if not matches:
                continue
            issues.append(
                AuditIssue(
                    title=audit.get("title"),
                    description=audit.get("description"),
                    score=_percent(audit["score"]),
                    category=category,
                    details=audit.get("details"),
                )
            )
            if len(issues) == MAX_ITEMS:
                break
        return issues
