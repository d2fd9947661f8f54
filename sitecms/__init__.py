"""
Content API for the portfolio / business site.

This package provides a FastAPI application that serves and edits the site's
content. Every entity is stored as a single JSON value in a Redis-compatible
key-value store, with a local JSON file as fallback when Redis is absent or
unreachable.
"""
