"""
Application package initializer.

Contains the FastAPI entrypoint (``main``) and its subpackages:
``api`` for routes, ``schemas`` for pydantic models, ``services`` for
business logic and ``core`` for configuration, storage and validation.
"""

from .main import app  # noqa: F401
