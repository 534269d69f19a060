"""Logging setup shared by the API server and the CLI."""
import logging
from typing import Optional

from .settings import ReviewerServiceConfig

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(config: Optional[ReviewerServiceConfig] = None) -> None:
    """Configure root logging from the service configuration.

    ``env=local`` always logs at DEBUG; otherwise ``log_level`` applies.
    When ``log_file`` is set, records go to that file as well as stderr.
    """
    config = config or ReviewerServiceConfig()

    if config.env == "local":
        level = logging.DEBUG
    else:
        level = getattr(logging, config.log_level.upper(), logging.INFO)

    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if config.log_file:
        handlers.append(logging.FileHandler(config.log_file, encoding="utf-8"))

    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        handlers=handlers,
        force=True,
    )
