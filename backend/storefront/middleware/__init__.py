# Middleware package init
"""
Storefront Backend - Middleware Package
========================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain (order matters!):
    Request → [Request ID] → [Logging] → [CORS] → Route Handler

    1. Request ID: Generate correlation ID for logging and error bodies
    2. Logging: Log request details with the generated request ID
    3. CORS: Answer preflights, add Access-Control-* headers

    The order is reversed for responses, so the logged status is the final
    one and every response (errors included) carries CORS headers.
"""
