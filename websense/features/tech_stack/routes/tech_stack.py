from fastapi import APIRouter, Depends

from websense.features.tech_stack.services.detector import TechStackService, get_tech_stack_service
from websense.platform.config import settings
from websense.platform.logger import get_logger
from websense.platform.response import analysis_error, analysis_result
from websense.platform.schemas import AnalyzeRequest
from websense.platform.utils.url_validator import normalize_url

logger = get_logger("tech_stack_routes")
router = APIRouter(prefix="/analyze", tags=["tech-stack"])


async def _run(service: TechStackService, raw_url: str):
    url = normalize_url(raw_url)
    try:
        return analysis_result(await service.analyze(url))
    except Exception as e:
        logger.error(f"Tech stack analysis error for {url}: {e}", exc_info=True)
        return analysis_error(url, f"Failed to analyze tech stack: {e}")


@router.post("/tech-stack", summary="Detect and categorize the technologies a site uses")
async def analyze_tech_stack(
    request: AnalyzeRequest,
    service: TechStackService = Depends(get_tech_stack_service),
):
    return await _run(service, request.url)


@router.get("/test-tech-stack")
async def test_tech_stack(service: TechStackService = Depends(get_tech_stack_service)):
    return await _run(service, settings.TEST_TARGET_URL)
