import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from websense.api_routers.api import api_router
from websense.features.health.routes.health import router as health_router
from websense.platform.config import settings
from websense.platform.exceptions import add_exception_handlers

# Configure logging to show INFO level messages
logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)

APP_VERSION = "1.0.0"

app = FastAPI(
    title=settings.APP_NAME,
    description="Website performance, security and technology analysis API",
    version=APP_VERSION,
    debug=settings.DEBUG,
)


# Root endpoint for basic info
@app.get("/", tags=["Info"])
def root():
    return {
        "app_name": settings.APP_NAME,
        "description": "Analyze websites with Lighthouse, CrUX, security header and tech stack checks.",
        "version": APP_VERSION,
        "docs_url": "/docs",
        "api_base": "/api",
    }


app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.FRONTEND_URL],
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE"],
    allow_headers=["*"],
)

add_exception_handlers(app)

app.include_router(health_router)
app.include_router(api_router, prefix="/api")
