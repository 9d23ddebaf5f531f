"""Mini README: Interactive interfaces for the shift close service.

Exports the FastAPI application factory that serves the closing form and
its JSON handlers.
"""

from .web_app import create_application

__all__ = ["create_application"]
