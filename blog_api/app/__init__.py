"""
Application package.

Contains the FastAPI entrypoint (``main``) and its layers: ``core``
(configuration, logging, errors, the MongoDB store), ``schemas``
(pydantic payload models), ``services`` (store operations per
resource) and ``api`` (routers).
"""

from .main import app, create_app  # noqa: F401
