"""
Echo Server Backend: Routes Package
=====================================

Route Inventory:
    - root.py:  GET /          (mounted without prefix)
    - api.py:   GET /api/echo  (mounted under /api)

Both are built by echo.echo_router(); they differ only in path and message.
"""
