"""
Movie metadata proxy service.

Forwards browser requests to the TMDB API with the server-side credential
attached, translating query parameters through the static route table.
"""

from typing import Dict, Optional

import httpx
from fastapi import Request
from fastapi.responses import JSONResponse, PlainTextResponse, RedirectResponse

from shared.base_service import BaseService
from service_proxy.app.adapters import TMDBClient
from service_proxy.app.routing import (
    LEGACY_REDIRECTS,
    ROUTES,
    RedirectRoute,
    build_upstream_params,
)
from service_proxy.app.routing.route_table import AnyRoute

READINESS_TEXT = "TMDB proxy server is running"


class ProxyService(BaseService):
    """Request forwarder implementation."""

    def __init__(self, transport: Optional[httpx.AsyncBaseTransport] = None):
        super().__init__("proxy")
        self.tmdb_client = TMDBClient(
            self.config.tmdb_base_url,
            self.config.tmdb_api_key,
            timeout=self.config.tmdb_timeout_seconds,
            transport=transport,
            metrics=self.metrics,
        )

        if not self.tmdb_client.has_credential:
            self.logger.warning("TMDB_API_KEY is not set; upstream calls will be unauthenticated")

        self._setup_proxy_routes()

        # Expose service instance via app state for introspection/testing
        self.app.state.proxy_service = self

    def _setup_proxy_routes(self):
        """Register readiness, legacy redirects and every proxied route."""

        @self.app.get("/", response_class=PlainTextResponse)
        async def root():
            return READINESS_TEXT

        for redirect in LEGACY_REDIRECTS:
            self.app.add_api_route(
                redirect.path,
                self._redirect_endpoint(redirect),
                methods=["GET"],
                name=redirect.name,
                deprecated=True,
            )

        for route in ROUTES:
            self.app.add_api_route(
                route.path,
                self._proxy_endpoint(route),
                methods=["GET"],
                name=route.name,
            )

    def _proxy_endpoint(self, route: AnyRoute):
        async def endpoint(request: Request):
            return await self.forward(route, request)

        endpoint.__name__ = route.name
        return endpoint

    def _redirect_endpoint(self, redirect: RedirectRoute):
        async def endpoint(request: Request):
            return RedirectResponse(
                url=redirect.location(request.url.query),
                status_code=redirect.status_code,
            )

        endpoint.__name__ = redirect.name
        return endpoint

    async def forward(self, route: AnyRoute, request: Request) -> JSONResponse:
        """Translate one inbound request into exactly one upstream call."""
        query = request.query_params
        target = route.resolve(query)

        # Raises MissingParameterError before any upstream traffic
        params = build_upstream_params(target, query)
        upstream_path = target.upstream_path(request.path_params)

        status_code, data = await self.tmdb_client.get(
            upstream_path,
            params,
            route=target.name,
            description=target.description,
        )
        return JSONResponse(status_code=status_code, content=data)

    async def _check_dependencies(self) -> Dict[str, str]:
        return {
            "upstream_credential": "configured" if self.tmdb_client.has_credential else "missing",
        }


def create_app(transport: Optional[httpx.AsyncBaseTransport] = None):
    """Create FastAPI application."""
    service = ProxyService(transport=transport)
    return service.app


def main():
    ProxyService().run()


if __name__ == "__main__":
    main()
