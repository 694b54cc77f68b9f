# Middleware package init
"""
QuickNotes Backend - Middleware Package
========================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain:
    Request → [Request ID] → [Logging] → [CORS] → Route Handler

    Responses travel back in reverse, so the access log sees the final
    status and the request ID header is set last.
"""
