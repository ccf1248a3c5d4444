"""
Route mapping for the proxy: inbound paths, upstream templates and
parameter-translation rules.
"""

from .route_table import (
    ROUTES,
    LEGACY_REDIRECTS,
    ProxyRoute,
    ConditionalRoute,
    RedirectRoute,
    build_upstream_params,
)

__all__ = [
    "ROUTES",
    "LEGACY_REDIRECTS",
    "ProxyRoute",
    "ConditionalRoute",
    "RedirectRoute",
    "build_upstream_params",
]
