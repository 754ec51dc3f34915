"""Berlin Clock (Mengenlehreuhr) Package

This package converts wall-clock times into the lamp pattern of the Berlin
Clock and back, and serves the conversion over HTTP and the command line.
"""

from .codec import LampState, WallTime, decode, encode, now, parse_time_string
from .config import ServerConfig

__all__ = [
    "LampState",
    "ServerConfig",
    "WallTime",
    "decode",
    "encode",
    "now",
    "parse_time_string",
]
