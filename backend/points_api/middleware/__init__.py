# Middleware package init
"""
Points API — Middleware Package
=================================

What:  Cross-cutting concerns applied to every ASGI request.

Middleware Chain:
    Request → [Request ID] → [Logging] → Route Handler
    Response ← [Request ID] ← [Logging] ← Route Handler

    - Request ID sets the correlation ID before anything logs
    - Logging records status and duration once the response exists

The Lambda entry points do not use these; they log the AWS request ID
from the invocation context instead.
"""
