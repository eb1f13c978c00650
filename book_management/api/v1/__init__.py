"""
Version 1 of the HTTP API: routers, schemas, converters and dependency wiring.
"""
