"""
Adapters package for the proxy service.

Contains the HTTP client wrapper for the upstream movie metadata API. The
adapter encapsulates the base URL, the credential headers and the mapping
of upstream failures onto shared errors.
"""

from .tmdb_client import TMDBClient

__all__ = [
    "TMDBClient",
]
