from fastapi import APIRouter

from websense.features.core_web_vitals.routes.core_web_vitals import router as core_web_vitals_router
from websense.features.dashboard.routes.dashboard import router as dashboard_router
from websense.features.lighthouse.routes.lighthouse import router as lighthouse_router
from websense.features.mobile_friendly.routes.mobile_friendly import router as mobile_friendly_router
from websense.features.security_headers.routes.security_headers import router as security_headers_router
from websense.features.site_probe.routes.site_probe import router as site_probe_router
from websense.features.tech_stack.routes.tech_stack import router as tech_stack_router

api_router = APIRouter()

# Analysis routes (/analyze/...)
api_router.include_router(lighthouse_router)
api_router.include_router(site_probe_router)
api_router.include_router(tech_stack_router)
api_router.include_router(security_headers_router)
api_router.include_router(mobile_friendly_router)
api_router.include_router(core_web_vitals_router)

api_router.include_router(dashboard_router)
