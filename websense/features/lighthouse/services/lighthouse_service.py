from fastapi.concurrency import run_in_threadpool

from websense.features.lighthouse.schemas.lighthouse import LighthouseResult
from websense.features.lighthouse.services.lighthouse_runner import LighthouseRunner
from websense.features.lighthouse.services.report_parser import LighthouseReportParser
from websense.platform.exceptions import AnalysisError
from websense.platform.logger import get_logger

logger = get_logger("lighthouse_service")


class UnusableReportError(AnalysisError):
    """Lighthouse finished but its report describes a failed page load."""


class LighthouseService:
    def __init__(self, runner: LighthouseRunner | None = None):
        self.runner = runner or LighthouseRunner()

    async def analyze(self, url: str) -> LighthouseResult:
        """
        Run Lighthouse against an already-normalized ``url``.

        Raises:
            UnusableReportError: the report exists but cannot be trusted.
            AnalysisError: the CLI or its report failed.
        """
        logger.info(f"Starting Lighthouse analysis for: {url}")

        # subprocess.run blocks; keep it off the event loop
        report = await run_in_threadpool(self.runner.run, url)

        problem = LighthouseReportParser.validate(report)
        if problem:
            raise UnusableReportError(problem)

        result = LighthouseReportParser.parse(url, report)
        logger.info(f"Lighthouse analysis completed successfully for: {url}")
        return result


def get_lighthouse_service() -> LighthouseService:
    return LighthouseService()
