"""Configuration package for the Berlin Clock service."""

from .main import ServerConfig

__all__ = ["ServerConfig"]
