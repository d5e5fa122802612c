import httpx
import pytest

from websense.platform.exceptions import PageFetchError
from websense.platform.services.page_fetcher import USER_AGENT


@pytest.mark.asyncio
async def test_fetch_returns_error_statuses(mock_fetcher):
    fetcher = mock_fetcher(lambda request: httpx.Response(503, text="down"))

    response = await fetcher.fetch("https://example.com")

    assert response.status_code == 503
    assert response.text == "down"


@pytest.mark.asyncio
async def test_fetch_sends_user_agent(mock_fetcher):
    seen = {}

    def handler(request):
        seen["ua"] = request.headers.get("user-agent")
        return httpx.Response(200)

    await mock_fetcher(handler).fetch("https://example.com")
    assert seen["ua"] == USER_AGENT


@pytest.mark.asyncio
async def test_fetch_does_not_follow_redirects_by_default(mock_fetcher):
    def handler(request):
        if request.url.path == "/":
            return httpx.Response(301, headers={"Location": "https://example.com/home"})
        return httpx.Response(200, text="home")

    fetcher = mock_fetcher(handler)

    assert (await fetcher.fetch("https://example.com/")).status_code == 301
    followed = await fetcher.fetch("https://example.com/", follow_redirects=True)
    assert followed.status_code == 200
    assert str(followed.url) == "https://example.com/home"


@pytest.mark.asyncio
async def test_fetch_timeout(mock_fetcher):
    def handler(request):
        raise httpx.ConnectTimeout("timed out", request=request)

    with pytest.raises(PageFetchError) as exc_info:
        await mock_fetcher(handler, timeout=10).fetch("https://example.com")

    assert exc_info.value.timed_out is True
    assert str(exc_info.value) == "Request timeout after 10 seconds"


@pytest.mark.asyncio
async def test_fetch_connection_error(mock_fetcher):
    def handler(request):
        raise httpx.ConnectError("Name or service not known", request=request)

    with pytest.raises(PageFetchError) as exc_info:
        await mock_fetcher(handler).fetch("https://nope.invalid")

    assert exc_info.value.timed_out is False
    assert "Name or service not known" in str(exc_info.value)


@pytest.mark.asyncio
async def test_fetch_malformed_url(mock_fetcher):
    def handler(request):
        raise ValueError("unknown url type: '/'")

    with pytest.raises(PageFetchError) as exc_info:
        await mock_fetcher(handler).fetch("https://")

    assert exc_info.value.timed_out is False
    assert str(exc_info.value) == "unknown url type: '/'"
