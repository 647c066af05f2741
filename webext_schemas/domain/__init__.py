"""
Domain types for the WebExtension schema loader.

This package holds:
* The loader configuration and the result model (models.py).
* The comment-tolerant JSON parsing helpers (json_comments.py).
"""
