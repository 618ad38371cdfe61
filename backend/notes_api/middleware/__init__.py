# Middleware package init
"""
Notes API — Middleware Package
================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain (order matters!):
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

    1. Request ID: Assign a correlation ID used by the logs and error bodies
    2. Logging: Log method, path, status and duration with that ID
    3. GZip / CORS: Provided by FastAPI

    Responses travel back through the chain in reverse, so the request ID
    header and the access log line are added after the handler returns.
"""
