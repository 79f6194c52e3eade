"""Web interface for fitfeed."""

from .app import create_app

__all__ = ["create_app"]
