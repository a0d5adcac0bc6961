"""
Echo Server Backend: Application Package Initializer
======================================================

What: Marks the `app` directory as a Python package.
Who:  Used implicitly by Python's import system and explicitly by pytest and uvicorn.

Layout:
    config.py       Settings loaded from the environment
    exceptions.py   Exception hierarchy
    main.py         Application factory and exception handlers
    server.py       uvicorn entry point
    middleware/     Request-processing stages
    routes/         Echo routers
    schemas/        Response bodies
    services/       Body parsers
"""

__version__ = "1.0.0"
