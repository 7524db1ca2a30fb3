"""Bank API HTTP client relaying requests to the upstream banking API"""

import logging
from dataclasses import dataclass
from typing import Any

import httpx
from bank_dashboard.config import settings

NETWORK_FAILURE_STATUS = 502
NETWORK_FAILURE_BODY = {"error": "Network Failure"}


@dataclass
class RelayResponse:
    """Upstream status and decoded JSON body, passed through verbatim"""

    status: int
    body: Any


class BankClient:
    """Client for the external bank API, authenticated with a fixed API key header"""

    def __init__(
        self,
        base_url: str | None = None,
        api_key: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url if base_url is not None else settings.bank_api_base_url
        self.api_key = api_key if api_key is not None else settings.bank_api_key
        self.timeout = timeout if timeout is not None else settings.http_timeout_seconds
        self.transport = transport

    def _headers(self) -> dict[str, str]:
        return {
            "x-api-key": self.api_key,
            "Content-Type": "application/json",
        }

    async def relay(self, endpoint: str) -> RelayResponse:
        """
        Forward a GET for endpoint to the upstream base URL.

        Upstream status and JSON body are returned as-is, errors included.
        Any failure to obtain a decoded upstream body, including a target URL
        that cannot be built, becomes a 502 response instead of an exception.
        """
        target_url = f"{self.base_url}{endpoint}"

        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            try:
                response = await client.get(target_url, headers=self._headers())
                return RelayResponse(status=response.status_code, body=response.json())

            except (httpx.HTTPError, httpx.InvalidURL, ValueError) as e:
                logging.error(f"Bank API relay failed for {endpoint}: {e}")
                return RelayResponse(status=NETWORK_FAILURE_STATUS, body=dict(NETWORK_FAILURE_BODY))
