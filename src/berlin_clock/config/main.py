"""Main configuration class for the Berlin Clock service.

Settings are immutable once built. ``ServerConfig.from_env`` reads overrides
from ``BERLIN_CLOCK_*`` environment variables; the CLI loads a ``.env`` file
into the environment before calling it.
"""

import os
from dataclasses import dataclass
from typing import Any

from ..utils.exceptions import InvalidConfigurationError

ENV_PREFIX = "BERLIN_CLOCK_"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class ServerConfig:
    """Configuration for the HTTP server.

    Attributes:
        host: Interface the server binds to
        port: TCP port the server listens on
        cors_origins: Origins allowed to call the API from a browser
        log_level: Name of the logging level
        log_file: Optional file that receives a copy of the logs
        json_logs: Render logs as JSON lines instead of columns

    """

    host: str = "127.0.0.1"
    port: int = 8080
    cors_origins: tuple[str, ...] = ("*",)
    log_level: str = "INFO"
    log_file: str | None = None
    json_logs: bool = False

    def __post_init__(self) -> None:
        """Normalise and validate the settings."""
        object.__setattr__(self, "log_level", self.log_level.upper())
        object.__setattr__(self, "cors_origins", tuple(self.cors_origins))

        if not 1 <= self.port <= 65535:
            raise InvalidConfigurationError("port", self.port, "an integer in [1, 65535]")
        if self.log_level not in LOG_LEVELS:
            raise InvalidConfigurationError("log_level", self.log_level, f"one of {', '.join(LOG_LEVELS)}")
        if not self.cors_origins:
            raise InvalidConfigurationError("cors_origins", self.cors_origins, "at least one origin")

    @classmethod
    def from_env(cls) -> "ServerConfig":
        """Build a configuration from ``BERLIN_CLOCK_*`` environment variables.

        Unset or empty variables keep their defaults.
        """
        raw = {
            key: os.getenv(f"{ENV_PREFIX}{key.upper()}", "").strip()
            for key in ("host", "port", "cors_origins", "log_level", "log_file", "json_logs")
        }
        overrides: dict[str, Any] = {
            key: value
            for key, value in raw.items()
            if value and key in ("host", "log_level", "log_file")
        }

        if raw["port"]:
            try:
                overrides["port"] = int(raw["port"])
            except ValueError:
                raise InvalidConfigurationError("port", raw["port"], "an integer in [1, 65535]") from None
        if raw["cors_origins"]:
            overrides["cors_origins"] = tuple(
                origin.strip() for origin in raw["cors_origins"].split(",") if origin.strip()
            )
        if raw["json_logs"]:
            overrides["json_logs"] = raw["json_logs"].lower() in ("1", "true", "yes", "on")

        return cls(**overrides)
