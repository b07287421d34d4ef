# Middleware package init
"""
Bars API Backend - Middleware Package
======================================

Middleware Chain (order matters!):
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → Route

    1. Request ID: correlation id for logs and error bodies
    2. Logging: access line with status and duration
"""
