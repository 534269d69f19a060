"""Request dependencies"""
from fastapi import Request

from ..core.services import Services


def get_services(request: Request) -> Services:
    """Service layer attached to the running application."""
    return request.app.state.services
