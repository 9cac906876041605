# Middleware package init
"""
DressStore Backend: Middleware Package
========================================

Middleware Chain (request direction):
    Request → [Request ID] → [Access Logging] → [CORS] → Route Handler

Request ID runs first so the access log line carries the ID.
"""
