# Middleware package init
"""
MemoPad Backend — Middleware Package
======================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain (order matters!):
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

    1. Request ID: correlation ID for logs, error bodies and the response header
    2. Logging: access line with status and duration
    3. CORS: credentialed requests from the configured frontend origin only
"""
