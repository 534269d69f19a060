"""API route modules."""
from . import pull_requests, stats, teams, users

__all__ = [
    "pull_requests",
    "stats",
    "teams",
    "users",
]
