from typing import Mapping, Optional

from websense.features.security_headers.schemas.security_headers import (
    HeaderCheck,
    HttpsStatus,
    SecurityHeadersReport,
    SecurityHeadersResult,
    SecuritySummary,
)
from websense.platform.logger import get_logger
from websense.platform.services.page_fetcher import PageFetcher
from websense.platform.utils.timestamps import round_half_up, utc_timestamp
from websense.platform.utils.url_validator import is_https

logger = get_logger("security_headers")

# report field, header name, short label, what the header protects against
SECURITY_HEADERS = (
    ("hsts", "Strict-Transport-Security", "HSTS", "Add HSTS header to prevent downgrade attacks"),
    ("csp", "Content-Security-Policy", "CSP", "Add CSP header to prevent XSS attacks"),
    ("x_frame_options", "X-Frame-Options", "X-Frame-Options",
     "Add X-Frame-Options to prevent clickjacking"),
    ("x_content_type_options", "X-Content-Type-Options", "X-Content-Type-Options",
     "Add X-Content-Type-Options to prevent MIME sniffing"),
    ("referrer_policy", "Referrer-Policy", "Referrer-Policy",
     "Add Referrer-Policy to protect sensitive referral data"),
    ("permissions_policy", "Permissions-Policy", "Permissions-Policy",
     "Add Permissions-Policy to restrict feature access"),
)


def overall_status(score: int) -> str:
    if score >= 80:
        return "Excellent"
    if score >= 60:
        return "Good"
    if score >= 40:
        return "Fair"
    if score >= 20:
        return "Poor"
    return "Very Poor"


def check_header(headers: Mapping[str, str], header: str, label: str, advice: str) -> HeaderCheck:
    value = headers.get(header)
    if not value:
        return HeaderCheck(
            description=f"{header} header not found",
            recommendation=advice,
        )
    return HeaderCheck(
        present=True,
        value=value,
        status="Present",
        description=f"{label} header is configured",
        recommendation=f"{label} is properly configured",
    )


def analyze_headers(headers: Mapping[str, str], https_enabled: bool) -> SecurityHeadersReport:
    """
    Grade the response headers. ``headers`` must be case-insensitive
    (``httpx.Headers`` is).
    """
    checks = {
        field: check_header(headers, header, label, advice)
        for field, header, label, advice in SECURITY_HEADERS
    }

    present = sum(1 for check in checks.values() if check.present)
    score = round_half_up(present / len(SECURITY_HEADERS) * 100)
    summary = SecuritySummary(
        total_headers=present,
        security_score=score,
        overall_status=overall_status(score),
        recommendations=[check.recommendation for check in checks.values() if not check.present],
    )

    return SecurityHeadersReport(
        https=HttpsStatus(
            enabled=https_enabled,
            status="Secure" if https_enabled else "Insecure",
            description="Website uses HTTPS encryption" if https_enabled else "Website uses unencrypted HTTP",
        ),
        summary=summary,
        **checks,
    )


class SecurityHeadersService:
    def __init__(self, fetcher: Optional[PageFetcher] = None):
        self.fetcher = fetcher or PageFetcher()

    async def analyze(self, url: str) -> SecurityHeadersResult:
        logger.info(f"Starting security headers analysis for: {url}")

        # Headers of the first response: a redirect's own headers count
        response = await self.fetcher.fetch(url, follow_redirects=False)
        report = analyze_headers(response.headers, is_https(url))

        logger.info(
            f"Security headers analysis completed for {url}: "
            f"{report.summary.total_headers}/6 present ({report.summary.overall_status})"
        )
        return SecurityHeadersResult(url=url, timestamp=utc_timestamp(), **dict(report))


def get_security_headers_service() -> SecurityHeadersService:
    return SecurityHeadersService()
