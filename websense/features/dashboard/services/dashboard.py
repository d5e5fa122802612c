from websense.features.dashboard.schemas.dashboard import DashboardSummary
from websense.platform.utils.timestamps import utc_timestamp


class DashboardService:
    """Analyses are not persisted, so the dashboard only reports system status."""

    @staticmethod
    def get_summary() -> DashboardSummary:
        return DashboardSummary(last_updated=utc_timestamp())
