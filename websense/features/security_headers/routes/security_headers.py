from fastapi import APIRouter, Depends

from websense.features.security_headers.services.security_headers import (
    SecurityHeadersService,
    get_security_headers_service,
)
from websense.platform.config import settings
from websense.platform.logger import get_logger
from websense.platform.response import analysis_error, analysis_result
from websense.platform.schemas import AnalyzeRequest
from websense.platform.utils.url_validator import normalize_url

logger = get_logger("security_headers_routes")
router = APIRouter(prefix="/analyze", tags=["security-headers"])


async def _run(service: SecurityHeadersService, raw_url: str):
    url = normalize_url(raw_url)
    try:
        return analysis_result(await service.analyze(url))
    except Exception as e:
        logger.error(f"Security headers analysis error for {url}: {e}", exc_info=True)
        return analysis_error(url, f"Failed to analyze security headers: {e}")


@router.post("/security-headers", summary="Grade a site's HTTP security headers")
async def analyze_security_headers(
    request: AnalyzeRequest,
    service: SecurityHeadersService = Depends(get_security_headers_service),
):
    return await _run(service, request.url)


@router.get("/test-security-headers")
async def test_security_headers(service: SecurityHeadersService = Depends(get_security_headers_service)):
    return await _run(service, settings.TEST_TARGET_URL)
