from typing import Any, Dict, Optional

import httpx

from websense.platform.config import settings
from websense.platform.exceptions import ConfigurationError, UpstreamAPIError
from websense.platform.logger import get_logger, mask_secret

logger = get_logger("crux_client")


class CruxClient:
    """Minimal client for the Chrome UX Report ``records:queryRecord`` API."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        api_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key if api_key is not None else settings.GOOGLE_API_KEY
        self.api_url = api_url or settings.CRUX_API_URL
        self.timeout = timeout if timeout is not None else settings.HTTP_TIMEOUT * 3
        self.transport = transport

    def _require_key(self) -> str:
        if not self.api_key:
            raise ConfigurationError("GOOGLE_API_KEY is not set.")
        return self.api_key

    async def _post(self, client: httpx.AsyncClient, body: Dict[str, Any], label: str) -> Dict[str, Any]:
        logger.info(f"Calling CrUX API for {label}")
        response = await client.post(self.api_url, params={"key": self.api_key}, json=body)
        logger.info(f"CrUX API response for {label}: {response.status_code} {response.reason_phrase}")

        if response.is_success:
            return response.json()

        detail = response.text
        try:
            payload = response.json()
        except ValueError:
            payload = None
        if isinstance(payload, dict) and isinstance(payload.get("error"), dict):
            detail = payload["error"].get("message") or detail

        message = f"CrUX API request failed: {response.status_code} {response.reason_phrase}"
        if detail:
            message = f"{message} - {detail}"
        raise UpstreamAPIError(message, status_code=response.status_code)

    async def query_record(self, origin: str, form_factor: str) -> Optional[Dict[str, Any]]:
        """
        Return the CrUX ``record`` for ``origin`` and ``form_factor``
        (``PHONE``/``DESKTOP``/``TABLET``), or None when CrUX has no data.

        The origin is first queried as a page URL, then as an origin.
        """
        key = self._require_key()
        logger.info(f"Using API key for CrUX API: {mask_secret(key)}")

        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            try:
                result = await self._post(
                    client, {"url": origin, "formFactor": form_factor}, f"page URL ({form_factor})"
                )
            except UpstreamAPIError as e:
                if e.status_code != 404:
                    raise
                logger.info(f"No page-level CrUX data for {form_factor}; retrying with origin")
                try:
                    result = await self._post(
                        client, {"origin": origin, "formFactor": form_factor}, f"origin ({form_factor})"
                    )
                except UpstreamAPIError as origin_error:
                    if origin_error.status_code != 404:
                        raise
                    logger.info(f"No CrUX data for {origin} on {form_factor}")
                    return None

        return result.get("record")
