from fastapi import APIRouter, Depends

from websense.features.mobile_friendly.services.mobile_friendly import (
    MobileFriendlyService,
    get_mobile_friendly_service,
)
from websense.platform.config import settings
from websense.platform.logger import get_logger
from websense.platform.response import analysis_error, analysis_result
from websense.platform.schemas import AnalyzeRequest
from websense.platform.utils.url_validator import normalize_url

logger = get_logger("mobile_friendly_routes")
router = APIRouter(prefix="/analyze", tags=["mobile-friendly"])


async def _run(service: MobileFriendlyService, raw_url: str):
    url = normalize_url(raw_url)
    try:
        return analysis_result(await service.analyze(url))
    except Exception as e:
        logger.error(f"Mobile-friendly analysis error for {url}: {e}", exc_info=True)
        return analysis_error(url, f"Failed to analyze mobile-friendliness: {e}")


@router.post("/mobile-friendly", summary="Heuristic mobile usability check of a page's HTML")
async def analyze_mobile_friendly(
    request: AnalyzeRequest,
    service: MobileFriendlyService = Depends(get_mobile_friendly_service),
):
    return await _run(service, request.url)


@router.get("/test-mobile-friendly")
async def test_mobile_friendly(service: MobileFriendlyService = Depends(get_mobile_friendly_service)):
    return await _run(service, settings.TEST_TARGET_URL)
