"""
Book catalogue API backed by a single JSON file.

The service keeps the whole collection in memory, loaded once from
``data/libros.json`` at startup, and rewrites that file after every
creation or deletion. ``create_app()`` builds the FastAPI application
around one ``BookRepository``; ``run()`` serves it with uvicorn on the
port given by the ``PORT`` environment variable (3000 by default).
"""

from .main import create_app, run  # noqa: F401
