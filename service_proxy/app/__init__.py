"""
Proxy service package for the movie metadata API.

The proxy fronts browser requests, handling:
- Credential injection: the TMDB bearer token never leaves the server
- Parameter translation: inbound query strings mapped to TMDB filter syntax
- Error envelopes: upstream failures relayed with a fixed JSON shape

Structure:
- app.main: FastAPI app, routes, and middleware wiring.
- app.adapters: HTTP client for the upstream API.
- app.routing: Static route table and parameter rules.
"""
