import json
from unittest.mock import patch

import httpx
import pytest

from websense.features.core_web_vitals.services.crux_client import CruxClient
from websense.platform.exceptions import ConfigurationError, UpstreamAPIError

NOT_FOUND = {"error": {"code": 404, "message": "chrome ux report data not found", "status": "NOT_FOUND"}}


def _client(handler, api_key="test-api-key-1234"):
    return CruxClient(
        api_key=api_key,
        api_url="https://crux.test/v1/records:queryRecord",
        transport=httpx.MockTransport(handler),
    )


@pytest.mark.asyncio
async def test_page_query_success(phone_record):
    requests = []

    def handler(request):
        requests.append(request)
        return httpx.Response(200, json={"record": phone_record})

    record = await _client(handler).query_record("https://example.com", "PHONE")

    assert record == phone_record
    assert len(requests) == 1
    assert requests[0].url.params["key"] == "test-api-key-1234"
    assert json.loads(requests[0].content) == {"url": "https://example.com", "formFactor": "PHONE"}


@pytest.mark.asyncio
async def test_falls_back_to_origin_query_on_404(phone_record):
    bodies = []

    def handler(request):
        body = json.loads(request.content)
        bodies.append(body)
        if "url" in body:
            return httpx.Response(404, json=NOT_FOUND)
        return httpx.Response(200, json={"record": phone_record})

    record = await _client(handler).query_record("https://example.com", "DESKTOP")

    assert record == phone_record
    assert bodies == [
        {"url": "https://example.com", "formFactor": "DESKTOP"},
        {"origin": "https://example.com", "formFactor": "DESKTOP"},
    ]


@pytest.mark.asyncio
async def test_no_data_for_form_factor():
    record = await _client(lambda request: httpx.Response(404, json=NOT_FOUND)).query_record(
        "https://example.com", "TABLET"
    )
    assert record is None


@pytest.mark.asyncio
async def test_api_error_message():
    def handler(request):
        return httpx.Response(403, json={"error": {"code": 403, "message": "API key not valid."}})

    with pytest.raises(UpstreamAPIError) as exc_info:
        await _client(handler).query_record("https://example.com", "PHONE")

    assert exc_info.value.status_code == 403
    assert str(exc_info.value) == "CrUX API request failed: 403 Forbidden - API key not valid."


@pytest.mark.asyncio
async def test_api_error_with_plain_text_body():
    with pytest.raises(UpstreamAPIError) as exc_info:
        await _client(lambda request: httpx.Response(500, text="backend error")).query_record(
            "https://example.com", "PHONE"
        )

    assert str(exc_info.value) == "CrUX API request failed: 500 Internal Server Error - backend error"


@pytest.mark.asyncio
async def test_missing_api_key():
    with pytest.raises(ConfigurationError) as exc_info:
        await _client(lambda request: httpx.Response(200), api_key="").query_record(
            "https://example.com", "PHONE"
        )

    assert str(exc_info.value) == "GOOGLE_API_KEY is not set."


@pytest.mark.asyncio
async def test_api_error_with_non_object_json_body():
    with pytest.raises(UpstreamAPIError) as exc_info:
        await _client(lambda request: httpx.Response(502, json=["upstream", "down"])).query_record(
            "https://example.com", "PHONE"
        )

    message = str(exc_info.value)
    assert message.startswith("CrUX API request failed: 502 Bad Gateway - [")
    assert "upstream" in message
    assert "has no attribute" not in message


@pytest.mark.asyncio
async def test_api_key_is_logged_masked():
    logged = []

    with patch("websense.features.core_web_vitals.services.crux_client.logger") as logger:
        logger.info.side_effect = lambda message: logged.append(message)
        await _client(
            lambda request: httpx.Response(200, json={"record": {}}),
            api_key="abcdef0123456789wxyz",
        ).query_record("https://example.com", "PHONE")

    assert "Using API key for CrUX API: abcdef...wxyz" in logged
    assert not any("abcdef0123456789wxyz" in message for message in logged)
