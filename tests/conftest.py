"""
Test configuration and fixtures for the WebSense API.

Logs and Lighthouse reports are redirected to a temporary directory before
the application is imported.
"""

import os
import tempfile
from typing import Generator

import httpx
import pytest
from dotenv import load_dotenv
from fastapi.testclient import TestClient

load_dotenv()

_tmp_dir = tempfile.mkdtemp(prefix="websense-tests-")
os.environ["LOG_DIR"] = os.path.join(_tmp_dir, "logs")
os.environ["REPORTS_DIR"] = os.path.join(_tmp_dir, "reports")
os.environ["TEST_TARGET_URL"] = "https://www.google.com"


@pytest.fixture(scope="session")
def test_app():
    """Create FastAPI test application."""
    from websense.main import app

    return app


@pytest.fixture(scope="function")
def client(test_app) -> Generator[TestClient, None, None]:
    """
    Create a test client for making HTTP requests.
    Dependency overrides set by a test are cleared afterwards.
    """
    with TestClient(test_app) as test_client:
        yield test_client
    test_app.dependency_overrides.clear()


@pytest.fixture
def mock_fetcher():
    """
    Build a ``PageFetcher`` backed by an ``httpx.MockTransport``.

    Usage: ``mock_fetcher(handler)`` where ``handler(request) -> httpx.Response``.
    """
    from websense.platform.services.page_fetcher import PageFetcher

    def _build(handler, timeout: float = 10):
        return PageFetcher(timeout=timeout, transport=httpx.MockTransport(handler))

    return _build
