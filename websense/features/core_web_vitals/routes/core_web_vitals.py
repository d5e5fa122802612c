from fastapi import APIRouter, Depends

from websense.features.core_web_vitals.services.core_web_vitals import (
    CoreWebVitalsService,
    get_core_web_vitals_service,
)
from websense.platform.config import settings
from websense.platform.logger import get_logger
from websense.platform.response import analysis_error, analysis_result
from websense.platform.schemas import AnalyzeRequest
from websense.platform.utils.url_validator import normalize_url

logger = get_logger("core_web_vitals_routes")
router = APIRouter(prefix="/analyze", tags=["core-web-vitals"])


async def _run(service: CoreWebVitalsService, raw_url: str):
    url = normalize_url(raw_url)
    try:
        return analysis_result(await service.analyze(url))
    except Exception as e:
        logger.error(f"Core Web Vitals analysis error for {url}: {e}", exc_info=True)
        return analysis_error(url, f"Failed to analyze Core Web Vitals: {e}")


@router.post("/core-web-vitals", summary="Real-user Core Web Vitals from the Chrome UX Report")
async def analyze_core_web_vitals(
    request: AnalyzeRequest,
    service: CoreWebVitalsService = Depends(get_core_web_vitals_service),
):
    return await _run(service, request.url)


@router.get("/test-core-web-vitals")
async def test_core_web_vitals(service: CoreWebVitalsService = Depends(get_core_web_vitals_service)):
    return await _run(service, settings.TEST_TARGET_URL)
