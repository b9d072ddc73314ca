"""
Cache Service package.

This package exposes the FastAPI application that stores short-lived
key-value items behind a single cache backend:

- app.main: Application entrypoint that wires routes and lifecycle.
- app.cache: The backend contract, the in-memory and Redis backends,
  backend selection and the expiration sweeper.
- app.models: Request models.

Design notes:
- Module import must not perform network calls. The backend is built
  in the startup hook and owned by the service instance; there is no
  module-level cache object.
- Use the shared/ utilities for logging, metrics, config, and errors.
"""
