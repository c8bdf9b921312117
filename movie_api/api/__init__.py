"""
HTTP API: application, routers, schemas and middleware.
"""
