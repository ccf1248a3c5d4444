"""
TMDB API client for the proxy.
"""

from typing import Any, Dict, Optional, Tuple
import time
import httpx

from shared.logging import get_logger
from shared.errors import UpstreamError
from shared.metrics import MetricsCollector


class TMDBClient:
    """Client for issuing authenticated GET requests against the TMDB API."""

    def __init__(
        self,
        base_url: str,
        api_key: Optional[str],
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        metrics: Optional[MetricsCollector] = None,
    ):
        self.base_url = base_url.rstrip('/')
        self.api_key = api_key
        self.timeout = timeout
        self.transport = transport
        self.metrics = metrics
        self.logger = get_logger("proxy.tmdb_client")

    @property
    def has_credential(self) -> bool:
        return bool(self.api_key)

    def _headers(self) -> Dict[str, str]:
        headers = {"accept": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        return headers

    def _client(self) -> httpx.AsyncClient:
        kwargs: Dict[str, Any] = {"headers": self._headers()}
        if self.timeout is not None:
            kwargs["timeout"] = self.timeout
        if self.transport is not None:
            kwargs["transport"] = self.transport
        return httpx.AsyncClient(**kwargs)

    async def get(
        self,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        route: str = "unknown",
        description: str = "data",
    ) -> Tuple[int, Any]:
        """
        Fetch ``path`` from the upstream API.

        Returns the upstream status code and decoded JSON body. Raises
        UpstreamError for non-2xx answers (carrying the upstream status) and
        for transport failures (no status).
        """
        url = f"{self.base_url}/{path.lstrip('/')}"
        start_time = time.time()

        try:
            async with self._client() as client:
                response = await client.get(url, params=params)
        except httpx.HTTPError as exc:
            self._record(route, "error", start_time)
            self.logger.error(
                "Upstream request failed",
                path=path,
                params=params,
                error=str(exc) or exc.__class__.__name__,
            )
            raise UpstreamError(
                path,
                message=str(exc) or exc.__class__.__name__,
                description=description,
            ) from exc

        self._record(route, str(response.status_code), start_time)

        if not response.is_success:
            message = self._error_message(response)
            self.logger.error(
                "Upstream request failed",
                path=path,
                params=params,
                status_code=response.status_code,
                error=message,
            )
            raise UpstreamError(
                path,
                upstream_status=response.status_code,
                message=message,
                description=description,
            )

        try:
            data = response.json()
        except ValueError as exc:
            self.logger.error("Upstream returned invalid JSON", path=path, body=response.text[:200])
            raise UpstreamError(
                path,
                message="Invalid JSON response",
                description=description,
            ) from exc

        self.logger.debug("Upstream response relayed", path=path, status_code=response.status_code)
        return response.status_code, data

    def _error_message(self, response: httpx.Response) -> str:
        # TMDB error bodies carry a human readable "status_message"
        try:
            body = response.json()
        except ValueError:
            body = None
        if isinstance(body, dict) and body.get("status_message"):
            return str(body["status_message"])
        return f"Upstream responded with status {response.status_code}"

    def _record(self, route: str, status: str, start_time: float) -> None:
        if self.metrics is not None:
            self.metrics.record_upstream_request(route, status, time.time() - start_time)
