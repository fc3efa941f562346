# Middleware package init
"""
Social Posts Backend — Middleware Package
==========================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain (order matters!):
    Request → [Request ID] → [Logging / fault barrier] → Route Handler

    1. Request ID first: the access log line and any error log share its id
    2. Logging: measures duration, logs the status, and turns any fault the
       exception handlers missed into an empty 500
"""
