from pathlib import Path
from typing import Literal, Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # ── App ─────────────────────────────────────
    APP_NAME: str = "WebSense Backend"
    ENVIRONMENT: Literal["development", "staging", "production"] = "development"
    DEBUG: bool = False
    PORT: int = 3001

    # ── CORS ────────────────────────────────────
    FRONTEND_URL: str = "http://localhost:3000"

    # ── Google APIs (CrUX) ──────────────────────
    GOOGLE_API_KEY: Optional[str] = None
    CRUX_API_URL: str = "https://chromeuxreport.googleapis.com/v1/records:queryRecord"

    # ── Lighthouse ──────────────────────────────
    LIGHTHOUSE_COMMAND: str = "npx lighthouse"
    LIGHTHOUSE_TIMEOUT: int = 60000  # milliseconds, forwarded to the CLI
    LIGHTHOUSE_CHROME_FLAGS: str = "--headless --no-sandbox --disable-gpu --disable-dev-shm-usage"
    LIGHTHOUSE_PROCESS_TIMEOUT: int = 180  # seconds per subprocess
    REPORTS_DIR: str = str(Path.cwd() / "reports")

    # ── Site fetching ───────────────────────────
    HTTP_TIMEOUT: float = 10.0
    TEST_TARGET_URL: str = "https://www.google.com"

    # ── Logging ─────────────────────────────────
    LOG_DIR: str = str(Path.cwd() / "logs")

    class Config:
        env_file = str(Path(__file__).parent.parent.parent / ".env")
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"


settings = Settings()
