# Middleware package init
"""
VenueAtlas Backend — Middleware Package
========================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain (order matters!):
    Request → [Request ID] → [Access Log] → [CORS] → Route Handler

    1. Request ID: assign or propagate X-Request-ID for log correlation
    2. Access Log: method, path, status, duration, caller
    3. CORS: Applied by FastAPI's CORSMiddleware (handles preflight)

Authorization is NOT middleware here: it is attached per route through
FastAPI dependencies (see app.auth), because only venue routes need it.
"""
