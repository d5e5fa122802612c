from typing import Any, Dict, List, Optional, Union

from pydantic import Field

from websense.platform.schemas import CamelModel


class TimelineContext(CamelModel):
    """Lab metrics (ms) used to describe a lone screenshot"""
    first_contentful_paint: Optional[float] = None
    largest_contentful_paint: Optional[float] = None
    speed_index: Optional[float] = None
    time_to_interactive: Optional[float] = None
    first_meaningful_paint: Optional[float] = None
    dom_content_loaded: Optional[float] = None


class Screenshot(CamelModel):
    id: Union[int, str]
    timestamp: Union[int, float]
    data: str
    width: Union[int, float] = 1200
    height: Union[int, float] = 800
    description: str
    phase: str
    timeline_context: Optional[TimelineContext] = None


class Suggestion(CamelModel):
    title: Optional[str] = None
    description: Optional[str] = None
    score: int
    savings: str
    details: Optional[Any] = None


class AuditIssue(CamelModel):
    title: Optional[str] = None
    description: Optional[str] = None
    score: int
    category: str
    details: Optional[Any] = None


class ResourceSummary(CamelModel):
    total_requests: int = 0
    total_size: str = "N/A"
    image_count: int = 0
    script_count: int = 0
    stylesheet_count: int = 0
    font_count: int = 0


class LighthouseResult(CamelModel):
    url: str
    score: int

    # Core lab metrics (display values, "N/A" when the audit is missing)
    first_contentful_paint: str = "N/A"
    speed_index: str = "N/A"
    largest_contentful_paint: str = "N/A"
    time_to_interactive: str = "N/A"
    total_blocking_time: str = "N/A"
    cumulative_layout_shift: str = "N/A"

    # Additional performance metrics
    max_potential_fid: str = Field(default="N/A", alias="maxPotentialFID")
    server_response_time: str = "N/A"
    render_blocking_resources: str = "N/A"
    unused_css: str = Field(default="N/A", alias="unusedCSS")
    unused_javascript: str = Field(default="N/A", alias="unusedJavaScript")
    modern_image_formats: str = "N/A"
    image_optimization: str = "N/A"

    categories: Dict[str, int] = Field(default_factory=dict)
    resources: ResourceSummary = Field(default_factory=ResourceSummary)
    suggestions: List[Suggestion] = Field(default_factory=list)
    accessibility_issues: List[AuditIssue] = Field(default_factory=list)
    best_practices_issues: List[AuditIssue] = Field(default_factory=list)
    seo_issues: List[AuditIssue] = Field(default_factory=list)
    screenshots: List[Screenshot] = Field(default_factory=list)
