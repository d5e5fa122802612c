from typing import Any, Dict, List, Optional

from pydantic import Field

from websense.platform.schemas import CamelModel


class MetricDistribution(CamelModel):
    """p75 plus the good / needs-improvement / poor histogram densities"""
    p75: float = 0
    good: float = 0
    needs_improvement: float = 0
    poor: float = 0
    total: float = 0


class FormFactorMetrics(CamelModel):
    lcp: MetricDistribution = Field(default_factory=MetricDistribution)
    fid: MetricDistribution = Field(default_factory=MetricDistribution)
    cls: MetricDistribution = Field(default_factory=MetricDistribution)
    ttfb: MetricDistribution = Field(default_factory=MetricDistribution)
    inp: MetricDistribution = Field(default_factory=MetricDistribution)


class FormFactors(CamelModel):
    desktop: Optional[FormFactorMetrics] = None
    mobile: Optional[FormFactorMetrics] = None
    tablet: Optional[FormFactorMetrics] = None


class VitalsSummary(CamelModel):
    overall_score: int = 0
    status: str = ""
    recommendations: List[str] = Field(default_factory=list)


def _connection_types() -> Dict[str, Any]:
    return {"4g": None, "3g": None, "2g": None, "slow2g": None}


class CoreWebVitalsReport(CamelModel):
    record_count: int = 0
    metrics: FormFactorMetrics = Field(default_factory=FormFactorMetrics)
    form_factors: FormFactors = Field(default_factory=FormFactors)
    effective_connection_types: Dict[str, Any] = Field(default_factory=_connection_types)
    summary: VitalsSummary = Field(default_factory=VitalsSummary)


class CoreWebVitalsResult(CoreWebVitalsReport):
    url: str
    origin: str
    success: bool = True
    timestamp: str
