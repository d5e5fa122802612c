from typing import List

from pydantic import Field

from websense.platform.schemas import CamelModel


class Technology(CamelModel):
    """A single technology reported by the fingerprinting engine"""
    name: str
    version: str = "Unknown"
    confidence: int = 0
    category: str = "Unknown"
    description: str = ""


class TechStackGroup(CamelModel):
    frontend: List[Technology] = Field(default_factory=list)
    backend: List[Technology] = Field(default_factory=list)
    databases: List[Technology] = Field(default_factory=list)
    programming_languages: List[Technology] = Field(default_factory=list)
    frameworks: List[Technology] = Field(default_factory=list)
    libraries: List[Technology] = Field(default_factory=list)


class DevOpsGroup(CamelModel):
    web_servers: List[Technology] = Field(default_factory=list)
    cdn: List[Technology] = Field(default_factory=list)
    hosting: List[Technology] = Field(default_factory=list)
    cloud_services: List[Technology] = Field(default_factory=list)


class CompetitorGroup(CamelModel):
    payment_processors: List[Technology] = Field(default_factory=list)
    advertising_networks: List[Technology] = Field(default_factory=list)
    ab_testing: List[Technology] = Field(default_factory=list)


class TechStackBreakdown(CamelModel):
    tech_stack: TechStackGroup = Field(default_factory=TechStackGroup)
    cms: List[Technology] = Field(default_factory=list)
    ecommerce: List[Technology] = Field(default_factory=list)
    analytics: List[Technology] = Field(default_factory=list)
    devops: DevOpsGroup = Field(default_factory=DevOpsGroup)
    security: List[Technology] = Field(default_factory=list)
    competitor: CompetitorGroup = Field(default_factory=CompetitorGroup)


class TechStackResult(TechStackBreakdown):
    url: str
    success: bool = True
    timestamp: str
