import uvicorn

from websense.platform.config import settings


def run() -> None:
    uvicorn.run(
        "websense.main:app",
        host="0.0.0.0",
        port=settings.PORT,
        reload=settings.ENVIRONMENT == "development",
    )


if __name__ == "__main__":
    run()
