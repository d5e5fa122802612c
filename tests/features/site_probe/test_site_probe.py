import httpx
import pytest

from websense.features.site_probe.services.site_probe import (
    SiteProbeService,
    get_site_probe_service,
    is_accessible,
)


def test_is_accessible():
    assert is_accessible(200)
    assert is_accessible(301)
    assert is_accessible(399)
    assert not is_accessible(404)
    assert not is_accessible(500)


@pytest.mark.asyncio
async def test_probe_does_not_follow_redirects(mock_fetcher):
    fetcher = mock_fetcher(lambda request: httpx.Response(301, headers={"Location": "https://www.example.com/"}))

    result = await SiteProbeService(fetcher=fetcher).probe("https://example.com")

    assert result.status_code == 301
    assert result.accessible is True
    assert result.message == "Website responded with status code: 301"


@pytest.mark.asyncio
async def test_probe_server_error(mock_fetcher):
    result = await SiteProbeService(fetcher=mock_fetcher(lambda request: httpx.Response(503))).probe(
        "https://example.com"
    )

    assert result.status_code == 503
    assert result.accessible is False


@pytest.mark.asyncio
async def test_probe_timeout(mock_fetcher):
    def handler(request):
        raise httpx.ReadTimeout("timed out", request=request)

    result = await SiteProbeService(fetcher=mock_fetcher(handler, timeout=10)).probe("https://slow.example")

    assert result.status_code is None
    assert result.accessible is False
    assert result.message == "Website connection timed out after 10 seconds"


@pytest.mark.asyncio
async def test_probe_connection_error(mock_fetcher):
    def handler(request):
        raise httpx.ConnectError("getaddrinfo ENOTFOUND nope.invalid", request=request)

    result = await SiteProbeService(fetcher=mock_fetcher(handler)).probe("https://nope.invalid")

    assert result.accessible is False
    assert result.message == "Website is not accessible: getaddrinfo ENOTFOUND nope.invalid"


def test_route_adds_scheme(client, test_app, mock_fetcher):
    seen = []

    def handler(request):
        seen.append(str(request.url))
        return httpx.Response(200)

    service = SiteProbeService(fetcher=mock_fetcher(handler))
    test_app.dependency_overrides[get_site_probe_service] = lambda: service

    response = client.get("/api/analyze/test-website/example.com")

    assert response.status_code == 200
    assert response.json() == {
        "url": "https://example.com",
        "statusCode": 200,
        "accessible": True,
        "message": "Website responded with status code: 200",
    }
    assert seen[0].startswith("https://example.com")


def test_route_accepts_full_url(client, test_app, mock_fetcher):
    service = SiteProbeService(fetcher=mock_fetcher(lambda request: httpx.Response(404)))
    test_app.dependency_overrides[get_site_probe_service] = lambda: service

    response = client.get("/api/analyze/test-website/http://example.com/missing")

    body = response.json()
    assert body["url"] == "http://example.com/missing"
    assert body["statusCode"] == 404
    assert body["accessible"] is False



@pytest.mark.asyncio
async def test_probe_url_without_host(mock_fetcher):
    def handler(request):
        raise httpx.UnsupportedProtocol(
            "Request URL is missing an 'http://' or 'https://' protocol.", request=request
        )

    result = await SiteProbeService(fetcher=mock_fetcher(handler)).probe("https://")

    assert result.status_code is None
    assert result.accessible is False
    assert result.message == (
        "Website is not accessible: Request URL is missing an 'http://' or 'https://' protocol."
    )


@pytest.mark.asyncio
async def test_probe_malformed_url_never_raises(mock_fetcher):
    def handler(request):
        raise ValueError("unknown url type: '/'")

    result = await SiteProbeService(fetcher=mock_fetcher(handler)).probe("https://example.com")

    assert result.accessible is False
    assert result.message == "Website is not accessible: unknown url type: '/'"
