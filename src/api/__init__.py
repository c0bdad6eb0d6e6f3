"""
HTTP API layer: routers, shared dependencies and exception handlers.
"""
