from fastapi import APIRouter, Depends

from websense.features.site_probe.services.site_probe import SiteProbeService, get_site_probe_service
from websense.platform.response import analysis_result
from websense.platform.utils.url_validator import normalize_url

router = APIRouter(prefix="/analyze", tags=["site-probe"])


@router.get("/test-website/{url:path}", summary="Check that a website answers before analyzing it")
async def test_website(url: str, service: SiteProbeService = Depends(get_site_probe_service)):
    return analysis_result(await service.probe(normalize_url(url)))
