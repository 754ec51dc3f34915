"""HTTP API for the Berlin Clock service."""

from .server import (
    DecodeResponse,
    LampStateModel,
    create_http_app,
    run_http_server,
)

__all__ = [
    "DecodeResponse",
    "LampStateModel",
    "create_http_app",
    "run_http_server",
]
