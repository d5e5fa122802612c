from typing import Any, List

from pydantic import Field

from websense.platform.schemas import CamelModel

MOBILE_FRIENDLY = "MOBILE_FRIENDLY"
NOT_MOBILE_FRIENDLY = "NOT_MOBILE_FRIENDLY"


class MobileIssueFlags(CamelModel):
    """True means the corresponding problem was detected"""
    viewport: bool = False
    text_size: bool = False
    clickable_elements: bool = False
    content_width: bool = False
    plugins: bool = False
    responsive_design: bool = False
    loading_speed: bool = False


class MobileFriendlyReport(CamelModel):
    verdict: str = MOBILE_FRIENDLY
    issues: List[str] = Field(default_factory=list)
    screenshots: List[Any] = Field(default_factory=list)
    details: MobileIssueFlags = Field(default_factory=MobileIssueFlags)
    recommendations: List[str] = Field(default_factory=list)


class MobileFriendlyResult(MobileFriendlyReport):
    url: str
    success: bool = True
    timestamp: str
