"""HTTP API exposing the Berlin Clock codec."""

from __future__ import annotations

from typing import Any

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from starlette.middleware.cors import CORSMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse

from berlin_clock import codec
from berlin_clock.config import ServerConfig
from berlin_clock.utils.clock import ClockProtocol
from berlin_clock.utils.exceptions import BerlinClockError
from berlin_clock.utils.logging_utils import logger


class LampStateModel(BaseModel):
    """JSON shape of a lamp state, with camelCase field names on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    seconds_lamp: str
    five_hours_row: str
    single_hours_row: str
    five_minutes_row: str
    single_minutes_row: str
    current_time: str | None = ""

    @classmethod
    def from_state(cls, state: codec.LampState) -> LampStateModel:
        return cls(
            seconds_lamp=state.seconds_lamp,
            five_hours_row=state.five_hours_row,
            single_hours_row=state.single_hours_row,
            five_minutes_row=state.five_minutes_row,
            single_minutes_row=state.single_minutes_row,
            current_time=state.source_time_label,
        )

    def to_state(self) -> codec.LampState:
        return codec.LampState(
            seconds_lamp=self.seconds_lamp,
            five_hours_row=self.five_hours_row,
            single_hours_row=self.single_hours_row,
            five_minutes_row=self.five_minutes_row,
            single_minutes_row=self.single_minutes_row,
            source_time_label=self.current_time or "",
        )


class DecodeResponse(BaseModel):
    time: str


def _dump(state: codec.LampState) -> dict[str, Any]:
    return LampStateModel.from_state(state).model_dump(by_alias=True)


# ----------------------------------------------------------------------
# Request handlers
# ----------------------------------------------------------------------


async def handle_current_time(clock: ClockProtocol | None = None) -> dict[str, Any]:
    """Handle /api/time GET requests."""
    return _dump(codec.current_lamp_state(clock))


async def handle_convert(time: str) -> dict[str, Any]:
    """Handle /api/time/convert GET requests."""
    state = codec.encode(codec.parse_time_string(time))
    logger.debug("Converted time", extra={"time": time})
    return _dump(state)


async def handle_decode(req: LampStateModel) -> dict[str, Any]:
    """Handle /api/time/decode POST requests."""
    decoded = codec.decode(req.to_state())
    logger.debug("Decoded lamp state", extra={"time": decoded.format()})
    return DecodeResponse(time=decoded.format()).model_dump()


async def handle_clock_error(request: Request, exc: Exception) -> JSONResponse:
    """Turn codec errors into ``400 Bad Request`` responses."""
    error_code = getattr(exc, "error_code", None)
    logger.warning(
        "Rejected request",
        extra={"path": request.url.path, "error_code": error_code, "reason": str(exc)},
    )
    return JSONResponse({"detail": str(exc), "error_code": error_code}, status_code=400)


async def handle_validation_error(request: Request, exc: Exception) -> JSONResponse:
    """Report malformed query strings and bodies as ``400`` instead of ``422``."""
    errors = exc.errors() if isinstance(exc, RequestValidationError) else []
    detail = "; ".join(
        f"{'.'.join(str(part) for part in err.get('loc', ()))}: {err.get('msg', '')}"
        for err in errors
    ) or "Malformed request"
    logger.warning("Rejected request", extra={"path": request.url.path, "reason": detail})
    return JSONResponse({"detail": detail, "error_code": "INVALID_FORMAT"}, status_code=400)


def create_http_app(
    config: ServerConfig | None = None,
    clock: ClockProtocol | None = None,
) -> FastAPI:
    """Build the FastAPI application.

    Args:
        config: Server configuration (defaults are used if None)
        clock: Time source for ``/api/time`` (system clock if None)

    Returns:
        Configured FastAPI application
    """
    config = config or ServerConfig()
    app = FastAPI(title="Berlin Clock API")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(config.cors_origins),
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )
    app.add_exception_handler(BerlinClockError, handle_clock_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)

    @app.get("/api/time")
    async def current_time() -> dict[str, Any]:  # type: ignore[reportUnusedFunction]
        return await handle_current_time(clock)

    @app.get("/api/time/convert")
    async def convert(time: str) -> dict[str, Any]:  # type: ignore[reportUnusedFunction]
        return await handle_convert(time)

    @app.post("/api/time/decode")
    async def decode(req: LampStateModel) -> dict[str, Any]:  # type: ignore[reportUnusedFunction]
        return await handle_decode(req)

    @app.get("/health")
    async def health() -> dict[str, str]:  # type: ignore[reportUnusedFunction]
        return {"status": "ok"}

    return app


def run_http_server(config: ServerConfig | None = None) -> None:
    """Serve the API with uvicorn until interrupted."""
    import uvicorn

    config = config or ServerConfig()
    app = create_http_app(config)
    logger.info(
        "Starting Berlin Clock API",
        extra={"host": config.host, "port": config.port},
    )
    # log_config=None keeps the handlers installed by setup_logging
    uvicorn.run(
        app,
        host=config.host,
        port=config.port,
        log_level=config.log_level.lower(),
        log_config=None,
    )
