# Middleware package init
"""
Storefront Backend — Middleware Package
========================================

Middleware Chain:
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

    Request ID runs first so the access log line and every service log
    record emitted while handling the request carry the same ID.
"""
