from typing import Any, List

from pydantic import Field

from websense.platform.schemas import CamelModel


class DashboardSummary(CamelModel):
    total_analyses: int = 0
    recent_analyses: List[Any] = Field(default_factory=list)
    system_status: str = "operational"
    last_updated: str
