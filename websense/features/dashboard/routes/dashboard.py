from fastapi import APIRouter

from websense.features.dashboard.schemas.dashboard import DashboardSummary
from websense.features.dashboard.services.dashboard import DashboardService
from websense.platform.response import api_response
from websense.platform.schemas import APIResponse

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get(
    "",
    response_model=APIResponse[DashboardSummary],
    summary="Get dashboard summary",
)
async def get_dashboard():
    summary = DashboardService.get_summary()
    return api_response(
        data=summary.model_dump(by_alias=True),
        message="Dashboard data retrieved successfully",
    )
