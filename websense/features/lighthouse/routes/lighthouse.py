from fastapi import APIRouter, Depends

from websense.features.lighthouse.services.lighthouse_runner import describe_failure
from websense.features.lighthouse.services.lighthouse_service import (
    LighthouseService,
    UnusableReportError,
    get_lighthouse_service,
)
from websense.platform.config import settings
from websense.platform.logger import get_logger
from websense.platform.response import analysis_error, analysis_result
from websense.platform.schemas import AnalyzeRequest
from websense.platform.utils.url_validator import normalize_url

logger = get_logger("lighthouse_routes")
router = APIRouter(prefix="/analyze", tags=["lighthouse"])


async def _run(service: LighthouseService, raw_url: str):
    url = normalize_url(raw_url)
    try:
        result = await service.analyze(url)
        return analysis_result(result)
    except UnusableReportError as e:
        return analysis_error(url, str(e), with_status=False)
    except Exception as e:
        logger.error(f"Lighthouse analysis error for {url}: {e}", exc_info=True)
        return analysis_error(
            url, f"Failed to analyze website: {describe_failure(e)}", with_status=False
        )


@router.post(
    "/lighthouse",
    summary="Run a Lighthouse audit",
    description="Performance, accessibility, best-practices, SEO and PWA audit of a page",
)
async def analyze_lighthouse(
    request: AnalyzeRequest,
    service: LighthouseService = Depends(get_lighthouse_service),
):
    return await _run(service, request.url)


@router.get("/test-lighthouse", summary="Run a Lighthouse audit against the test target")
async def test_lighthouse(service: LighthouseService = Depends(get_lighthouse_service)):
    return await _run(service, settings.TEST_TARGET_URL)
