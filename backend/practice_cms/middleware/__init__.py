# Middleware package init
"""
Practice CMS Backend — Middleware Package
=========================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain (order matters!):
    Request → [CORS] → [Request ID] → [Logging] → [Admin Auth] → [Admin Rate Limit] → Route

    1. CORS outermost: preflights are answered, and even 401/429 responses
       carry CORS headers so the admin UI can read them
    2. Request ID: correlation ID and client IP for every later log line
    3. Logging: sees the final status, including 401/429 short-circuits
    4. Admin Auth: anonymous /api/admin/* requests stop here
    5. Admin Rate Limit: only authenticated admin writes are counted
"""
