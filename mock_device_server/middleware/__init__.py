# Middleware package init
"""
Mock Device Server - Middleware Package
=======================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain (order matters!):
    Request → [CORS] → [Request ID] → [Logging] → [JSON body] → Route Handler

    1. CORS first: OPTIONS preflights are answered before anything else
       runs, and every other response leaves with the CORS headers attached.
    2. Request ID: correlation ID, stamped on every log line of the request.
    3. Logging: method, path, status, duration and device of each request.
    4. JSON body: a malformed application/json body is answered 400 on any
       path, before a route or the 404 fallback is chosen.

    The order is reversed for responses:
    Response ← [CORS] ← [Request ID] ← [Logging] ← [JSON body] ← Route Handler
"""
