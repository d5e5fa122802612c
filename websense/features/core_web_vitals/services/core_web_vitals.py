from typing import Any, Dict, Optional

from websense.features.core_web_vitals.schemas.core_web_vitals import (
    CoreWebVitalsReport,
    CoreWebVitalsResult,
    FormFactorMetrics,
    MetricDistribution,
    VitalsSummary,
)
from websense.features.core_web_vitals.services.crux_client import CruxClient
from websense.platform.logger import get_logger
from websense.platform.utils.timestamps import round_half_up, utc_timestamp
from websense.platform.utils.url_validator import origin_of

logger = get_logger("core_web_vitals")

# report field -> CrUX form factor
FORM_FACTORS = (("desktop", "DESKTOP"), ("mobile", "PHONE"), ("tablet", "TABLET"))

# report metric -> CrUX metric names, first present wins
CRUX_METRICS = (
    ("lcp", ("largest_contentful_paint",)),
    ("fid", ("first_input_delay",)),
    ("cls", ("cumulative_layout_shift",)),
    ("ttfb", ("experimental_time_to_first_byte", "time_to_first_byte")),
    ("inp", ("interaction_to_next_paint",)),
)

NO_DATA_RECOMMENDATIONS = [
    "No Core Web Vitals data available for this origin. This could mean:",
    "- The site is new or has low traffic",
    "- The site is not accessible to Chrome users",
    "- Try analyzing a specific page URL instead of the origin",
]

GENERAL_RECOMMENDATIONS = [
    "Consider implementing performance optimizations like:",
    "- Image optimization and lazy loading",
    "- Minimizing render-blocking resources",
    "- Using a CDN for faster content delivery",
    "- Implementing proper caching strategies",
]


def _number(value: Any) -> float:
    try:
        return float(value or 0)
    except (TypeError, ValueError):
        return 0.0


def parse_distribution(metric: Dict[str, Any]) -> MetricDistribution:
    histogram = metric.get("histogram") or []
    densities = [_number((histogram[i] or {}).get("density")) if i < len(histogram) else 0.0 for i in range(3)]
    good, needs_improvement, poor = densities
    return MetricDistribution(
        p75=_number((metric.get("percentiles") or {}).get("p75")),
        good=good,
        needs_improvement=needs_improvement,
        poor=poor,
        total=good + needs_improvement + poor,
    )


def parse_record(record: Dict[str, Any]) -> FormFactorMetrics:
    metrics = record.get("metrics") or {}
    parsed = FormFactorMetrics()
    for field, names in CRUX_METRICS:
        for name in names:
            if metrics.get(name):
                setattr(parsed, field, parse_distribution(metrics[name]))
                break
    return parsed


def summarize(metrics: Optional[FormFactorMetrics]) -> VitalsSummary:
    """
    Score = mean share of "good" experiences across LCP, CLS and INP
    (FID when INP is absent), using the mobile numbers when available.
    """
    summary = VitalsSummary()
    if metrics is None:
        summary.status = "No data available"
        return summary

    scores = []

    if metrics.lcp.total > 0:
        lcp_score = metrics.lcp.good / metrics.lcp.total * 100
        scores.append(lcp_score)
        if lcp_score < 75:
            summary.recommendations.append(
                f"Optimize Largest Contentful Paint (LCP): {metrics.lcp.p75:.0f}ms (75th percentile). Target < 2.5s."
            )

    if metrics.cls.total > 0:
        cls_score = metrics.cls.good / metrics.cls.total * 100
        scores.append(cls_score)
        if cls_score < 75:
            summary.recommendations.append(
                f"Improve Cumulative Layout Shift (CLS): {metrics.cls.p75:.3f} (75th percentile). Target < 0.1."
            )

    if metrics.inp.total > 0:
        inp_score = metrics.inp.good / metrics.inp.total * 100
        scores.append(inp_score)
        if inp_score < 75:
            summary.recommendations.append(
                f"Optimize Interaction to Next Paint (INP): {metrics.inp.p75:.0f}ms (75th percentile). Target < 200ms."
            )
    elif metrics.fid.total > 0:
        fid_score = metrics.fid.good / metrics.fid.total * 100
        scores.append(fid_score)
        if fid_score < 75:
            summary.recommendations.append(
                f"Improve First Input Delay (FID): {metrics.fid.p75:.0f}ms (75th percentile). Target < 100ms."
            )

    if scores:
        summary.overall_score = round_half_up(sum(scores) / len(scores))

    if summary.overall_score >= 90:
        summary.status = "Excellent"
        summary.recommendations.append("Great job! Your Core Web Vitals are performing well.")
    elif summary.overall_score >= 75:
        summary.status = "Good"
        summary.recommendations.append("Your Core Web Vitals are good, but there's room for improvement.")
    elif summary.overall_score >= 50:
        summary.status = "Needs Improvement"
        summary.recommendations.append("Your Core Web Vitals need attention to improve user experience.")
    else:
        summary.status = "Poor"
        summary.recommendations.append("Your Core Web Vitals require immediate attention.")

    if summary.overall_score < 90:
        summary.recommendations.extend(GENERAL_RECOMMENDATIONS)

    return summary


class CoreWebVitalsService:
    def __init__(self, client: Optional[CruxClient] = None):
        self.client = client or CruxClient()

    async def collect(self, origin: str) -> CoreWebVitalsReport:
        report = CoreWebVitalsReport()

        for field, form_factor in FORM_FACTORS:
            record = await self.client.query_record(origin, form_factor)
            if record:
                report.record_count += 1
                setattr(report.form_factors, field, parse_record(record))

        if report.record_count == 0:
            report.summary = VitalsSummary(
                status="No data available",
                recommendations=list(NO_DATA_RECOMMENDATIONS),
            )
            return report

        primary = report.form_factors.mobile or report.form_factors.desktop
        if primary is not None:
            report.metrics = primary
        report.summary = summarize(primary)
        return report

    async def analyze(self, url: str) -> CoreWebVitalsResult:
        logger.info(f"Starting Core Web Vitals (CrUX) analysis for: {url}")
        origin = origin_of(url)

        report = await self.collect(origin)
        logger.info(
            f"Core Web Vitals analysis completed for {origin}: "
            f"{report.summary.status} ({report.summary.overall_score})"
        )
        return CoreWebVitalsResult(url=url, origin=origin, timestamp=utc_timestamp(), **dict(report))


def get_core_web_vitals_service() -> CoreWebVitalsService:
    return CoreWebVitalsService()
