import json
import os
import secrets
import shlex
import subprocess
from pathlib import Path
from typing import Any, Dict, List, Optional

from websense.platform.config import settings
from websense.platform.exceptions import (
    AnalysisError,
    ReportError,
    ToolExecutionError,
    ToolNotFoundError,
)
from websense.platform.logger import get_logger
from websense.platform.utils.timestamps import epoch_millis

logger = get_logger("lighthouse_runner")

CATEGORIES = "performance,accessibility,best-practices,seo,pwa"
FALLBACK_CHROME_FLAGS = "--headless --no-sandbox"
FALLBACK_TIMEOUT_MS = 30000
MAX_WAIT_FOR_LOAD_MS = 30000
MIN_EXPECTED_REPORT_BYTES = 1000


class LighthouseRunner:
    """
    Runs the Lighthouse CLI as a subprocess and returns its parsed JSON report.

    The report is written to a uniquely named file under ``reports_dir`` and
    removed again once it has been read, whatever the outcome.
    """

    def __init__(
        self,
        command: Optional[str] = None,
        chrome_flags: Optional[str] = None,
        timeout_ms: Optional[int] = None,
        process_timeout: Optional[int] = None,
        reports_dir: Optional[str] = None,
    ):
        self.command = shlex.split(command or settings.LIGHTHOUSE_COMMAND)
        self.chrome_flags = chrome_flags or settings.LIGHTHOUSE_CHROME_FLAGS
        self.timeout_ms = timeout_ms or settings.LIGHTHOUSE_TIMEOUT
        self.process_timeout = process_timeout or settings.LIGHTHOUSE_PROCESS_TIMEOUT
        self.reports_dir = Path(reports_dir or settings.REPORTS_DIR)

    # ── Command construction ───────────────────

    def build_command(self, url: str, report_path: Path) -> List[str]:
        return [
            *self.command,
            url,
            "--output=json",
            f"--output-path={report_path}",
            f"--chrome-flags={self.chrome_flags}",
            f"--timeout={self.timeout_ms}",
            "--preset=desktop",
            f"--only-categories={CATEGORIES}",
            f"--max-wait-for-load={MAX_WAIT_FOR_LOAD_MS}",
            "--throttling-method=devtools",
        ]

    def build_fallback_command(self, url: str, report_path: Path) -> List[str]:
        """Lighter variant tried once when the primary run times out or is refused."""
        return [
            *self.command,
            url,
            "--output=json",
            f"--output-path={report_path}",
            f"--chrome-flags={FALLBACK_CHROME_FLAGS}",
            f"--timeout={FALLBACK_TIMEOUT_MS}",
            "--preset=desktop",
        ]

    def new_report_path(self) -> Path:
        self.reports_dir.mkdir(parents=True, exist_ok=True)
        filename = f"lighthouse-report-{epoch_millis()}-{secrets.token_hex(4)}.json"
        return self.reports_dir / filename

    # ── Execution ──────────────────────────────

    def _execute(self, argv: List[str]) -> subprocess.CompletedProcess:
        logger.info(f"Executing command: {shlex.join(argv)}")
        try:
            return subprocess.run(
                argv,
                capture_output=True,
                text=True,
                timeout=self.process_timeout,
                check=True,
            )
        except FileNotFoundError as e:
            raise ToolNotFoundError(
                "Lighthouse CLI not found. Please ensure lighthouse is installed: npm install -g lighthouse"
            ) from e
        except subprocess.TimeoutExpired as e:
            raise ToolExecutionError(
                f"Lighthouse process timeout after {self.process_timeout} seconds",
                timed_out=True,
            ) from e
        except subprocess.CalledProcessError as e:
            detail = (e.stderr or e.stdout or "").strip()[-1000:]
            raise ToolExecutionError(
                f"Command failed with exit code {e.returncode}: {detail}",
                timed_out="timeout" in detail.lower(),
            ) from e

    def probe_version(self) -> Optional[str]:
        """Log the installed CLI version. Never fails the analysis."""
        try:
            result = subprocess.run(
                [*self.command, "--version"],
                capture_output=True,
                text=True,
                timeout=60,
                check=True,
            )
        except (OSError, subprocess.SubprocessError) as e:
            logger.warning(f"Could not determine Lighthouse version: {e}")
            logger.info("This might indicate Lighthouse is not properly installed. Try: npm install -g lighthouse")
            return None

        version = result.stdout.strip()
        logger.info(f"Lighthouse version: {version}")
        return version

    def _run_to_file(self, argv: List[str], report_path: Path) -> None:
        try:
            result = self._execute(argv)
        except ToolExecutionError as e:
            # the CLI exits non-zero after saving a report that carries `runtimeError`
            if not self._has_readable_report(report_path):
                raise
            logger.warning(f"Lighthouse exited with an error but saved a report: {e}")
            return

        if result.stderr:
            logger.info(f"Lighthouse stderr: {result.stderr[-500:]}")
        logger.info(f"Lighthouse stdout length: {len(result.stdout)}")

        if not report_path.exists():
            raise ReportError("Lighthouse report file was not created")

        size = report_path.stat().st_size
        logger.info(f"Lighthouse report file created ({size} bytes)")
        if size < MIN_EXPECTED_REPORT_BYTES:
            logger.warning("Report file seems too small, may be incomplete")

    @staticmethod
    def should_fallback(error: AnalysisError) -> bool:
        if isinstance(error, ToolExecutionError) and error.timed_out:
            return True
        message = str(error)
        return "timeout" in message or "ECONNREFUSED" in message

    @staticmethod
    def _read_report(report_path: Path) -> Dict[str, Any]:
        try:
            with open(report_path, "r", encoding="utf-8") as fh:
                report = json.load(fh)
        except json.JSONDecodeError as e:
            raise ReportError(f"Lighthouse report is not valid JSON: {e}") from e

        if not isinstance(report, dict):
            raise ReportError("Lighthouse report has an unexpected format")
        return report

    @classmethod
    def _has_readable_report(cls, report_path: Path) -> bool:
        if not report_path.exists():
            return False
        try:
            cls._read_report(report_path)
        except (ReportError, OSError):
            return False
        return True

    @staticmethod
    def _cleanup(report_path: Path) -> None:
        try:
            os.remove(report_path)
        except FileNotFoundError:
            pass
        except OSError as e:
            logger.warning(f"Failed to cleanup report file {report_path}: {e}")

    def run(self, url: str) -> Dict[str, Any]:
        """
        Audit ``url`` and return the raw Lighthouse report.

        Raises:
            ToolNotFoundError: the CLI executable is missing.
            ToolExecutionError: the CLI failed (after the fallback, if tried).
            ReportError: no usable report was produced.
        """
        report_path = self.new_report_path()
        self.probe_version()

        try:
            try:
                self._run_to_file(self.build_command(url, report_path), report_path)
            except ToolNotFoundError:
                raise
            except (ToolExecutionError, ReportError) as exec_error:
                logger.error(f"Lighthouse command execution failed: {exec_error}")

                if not self.should_fallback(exec_error):
                    raise ToolExecutionError(f"Lighthouse execution failed: {exec_error}") from exec_error

                logger.info("Trying alternative Lighthouse command...")
                try:
                    self._run_to_file(self.build_fallback_command(url, report_path), report_path)
                except AnalysisError as alt_error:
                    logger.error(f"Alternative command also failed: {alt_error}")
                    raise exec_error
                logger.info("Alternative command succeeded")

            return self._read_report(report_path)
        finally:
            self._cleanup(report_path)


def describe_failure(error: Exception) -> str:
    """Translate a runner failure into the message shown to the user."""
    message = str(error)
    if isinstance(error, ToolNotFoundError):
        return "Lighthouse CLI not found. Please ensure lighthouse is installed."
    if (isinstance(error, ToolExecutionError) and error.timed_out) or "timeout" in message:
        return "Analysis timed out. The website may be too slow or unresponsive."
    if "ECONNREFUSED" in message:
        return "Cannot connect to the website. Please check the URL and try again."
    return message
