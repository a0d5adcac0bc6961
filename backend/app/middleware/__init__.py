"""
Echo Server Backend: Middleware Package
=========================================

What:  Request-processing stages applied to every request.

Middleware Chain (order matters!):
    Request → [Logging] → [CORS] → [Header removal] → [Error handler]
            → [Body parser] → [Cookie parser] → Route Handler

    Responses travel back through the same stages in reverse, so CORS
    headers and header removal also apply to 404 and 500 answers.
"""
