"""
Shared utilities for the movie metadata proxy.

This package aggregates common building blocks consumed by the services:

- config: Service configuration via pydantic-settings
- logging: Structured logging with request correlation
- metrics: Prometheus metrics helpers
- errors: Canonical error types and responses
- base_service: FastAPI app wiring shared by every service

Do not import from service_* packages into shared/.
"""
