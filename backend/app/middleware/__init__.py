# Middleware package init
"""
TravelMap Backend - Middleware Package
=======================================

Middleware Chain (order matters!):
    Request → [CORS] → [Request ID] → [Logging] → [Timeout] → [Error Boundary] → Route Handler

    1. CORS first: answers preflight, and decorates every response on the way out
    2. Request ID: correlation ID for logs and the X-Request-ID header
    3. Logging: one access line per request, with status and duration
    4. Timeout: cancels requests that exceed REQUEST_TIMEOUT_SECONDS (504)
    5. Error Boundary: converts any unmapped exception into a 500 JSON body
"""
