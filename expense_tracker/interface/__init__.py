"""Mini README: Browser dashboard and display formatting for the tracker.

Exports the FastAPI application factory used by the launcher and by
uvicorn's ``factory=True`` mode.
"""

from .web_app import create_application

__all__ = ["create_application"]
