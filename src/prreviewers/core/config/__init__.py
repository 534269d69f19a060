"""Configuration for the reviewer assignment service."""
from .log_setup import configure_logging
from .settings import ReviewerServiceConfig, get_config, init_config

__all__ = [
    "ReviewerServiceConfig",
    "configure_logging",
    "get_config",
    "init_config",
]
