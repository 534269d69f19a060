"""HTTP API for the reviewer assignment service."""
from .app import create_app

__all__ = ["create_app"]
