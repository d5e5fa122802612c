from typing import List, Optional

from pydantic import Field

from websense.platform.schemas import CamelModel


class HttpsStatus(CamelModel):
    enabled: bool
    status: str
    description: str


class HeaderCheck(CamelModel):
    present: bool = False
    value: Optional[str] = None
    status: str = "Missing"
    description: str
    recommendation: str


class SecuritySummary(CamelModel):
    total_headers: int = 0
    security_score: int = 0
    overall_status: str = "Poor"
    recommendations: List[str] = Field(default_factory=list)


class SecurityHeadersReport(CamelModel):
    https: HttpsStatus
    hsts: HeaderCheck
    csp: HeaderCheck
    x_frame_options: HeaderCheck
    x_content_type_options: HeaderCheck
    referrer_policy: HeaderCheck
    permissions_policy: HeaderCheck
    summary: SecuritySummary


class SecurityHeadersResult(SecurityHeadersReport):
    url: str
    success: bool = True
    timestamp: str
