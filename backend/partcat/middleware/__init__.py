# Middleware package init
"""
PartCat Backend — Middleware Package
======================================

Middleware Chain:
    Request → [Request ID] → [Logging] → [CORS] → Route Handler

    Request ID runs first so the access log line carries the id, and the id
    is written to the response headers on the way out.
"""
