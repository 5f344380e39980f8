# Middleware package init
"""
Contacts API — Middleware Package
===================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain:
    Request → [CORS] → [GZip] → [Request Context] → Route Handler

    Request Context sits inside CORS so the 500 it builds for an uncaught
    failure still passes through CORS on the way out.
"""
