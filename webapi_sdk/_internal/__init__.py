"""Internal modules for the WebAPI SDK.

WARNING: This package contains system-level modules used by ``WebClient``.
These are not intended for direct use in application code.

Modules:
    dispatch - Request queue, classification, retries and rate limiting
    pagination - Cursor pagination
    http - HTTP transport
    log - Logger setup
"""
