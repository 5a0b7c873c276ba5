from fastapi import Request

from .config import Settings
from .rcon import RconClient


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_rcon_client(request: Request) -> RconClient:
    """The shared RCON client created during application startup."""
    return request.app.state.rcon_client
