"""
Base connector class for marketplace API sources
"""
from typing import Any, Dict, Optional
from datetime import datetime, timezone
import time

import httpx

from app.config import get_settings
from app.services.errors import AuthExpired, PartialData, SourceUnavailable
from app.utils.logger import log


class BaseConnector:
    """
    Base class for upstream HTTP sources.

    Each call opens its own short-lived AsyncClient and makes a single
    attempt; failures are mapped onto the analytics error taxonomy.
    """

    def __init__(
        self,
        name: str,
        base_url: Optional[str] = None,
        token: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        settings = get_settings()
        self.name = name
        self.base_url = (base_url or settings.analytics_api_base_url).rstrip("/")
        self.token = token
        self.timeout = timeout if timeout is not None else settings.upstream_timeout_seconds
        self.transport = transport
        self.last_request = None
        self.request_count = 0
        self.error_count = 0

    def _get_headers(self) -> Dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.base_url,
            headers=self._get_headers(),
            timeout=self.timeout,
            transport=self.transport,
        )

    async def _get_json(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        """
        GET `path` and decode the JSON body.

        Raises:
            AuthExpired: upstream answered 401
            SourceUnavailable: transport error or any other non-2xx status
            PartialData: body is not valid JSON
        """
        start_time = time.time()
        self.request_count += 1
        self.last_request = datetime.now(timezone.utc)

        try:
            async with self._client() as client:
                response = await client.get(path, params=params)
        except httpx.HTTPError as e:
            self.error_count += 1
            log.error(f"{self.name} request to {path} failed: {str(e)}")
            raise SourceUnavailable(f"{self.name} unreachable: {str(e)}") from e

        elapsed = time.time() - start_time

        if response.status_code == 401:
            self.error_count += 1
            log.warning(f"{self.name} rejected credentials for {path}")
            raise AuthExpired(f"{self.name} rejected the session token")

        if not response.is_success:
            self.error_count += 1
            log.error(f"{self.name} returned {response.status_code} for {path} in {elapsed:.2f}s")
            raise SourceUnavailable(
                f"{self.name} returned HTTP {response.status_code}",
                status_code=response.status_code,
            )

        try:
            data = response.json()
        except ValueError as e:
            self.error_count += 1
            log.error(f"{self.name} returned a non-JSON body for {path}")
            raise PartialData(f"{self.name} returned an undecodable body") from e

        log.debug(f"{self.name} {path} answered in {elapsed:.2f}s")
        return data

    def get_status(self) -> Dict[str, Any]:
        """Get connector status"""
        return {
            "name": self.name,
            "base_url": self.base_url,
            "last_request": self.last_request,
            "request_count": self.request_count,
            "error_count": self.error_count,
            "error_rate": self.error_count / max(self.request_count, 1),
        }
