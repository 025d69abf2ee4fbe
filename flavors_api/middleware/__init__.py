# Middleware package init
"""
Flavors API — Middleware Package
=================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain (order matters!):
    Request → [Request ID] → [Logging] → Route Handler

    1. Request ID: Generate correlation ID for logging and tracing
    2. Logging: Log method, path, status and duration with that ID

    Responses travel back in reverse order, so the access log line sees the
    final status code and the X-Request-ID header is set last.
"""
