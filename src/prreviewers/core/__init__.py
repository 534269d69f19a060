"""Reviewer assignment core: configuration, storage, assignment logic and services."""
from . import assignment
from . import config
from . import errors
from . import schemas
from . import services
from . import storage

__all__ = [
    "assignment",
    "config",
    "errors",
    "schemas",
    "services",
    "storage",
]
