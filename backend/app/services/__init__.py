"""
Echo Server Backend: Services Package
=======================================

What:  Request-independent logic used by the middleware.
    - body_parsers.py: Content-Type driven request body parsing
"""
