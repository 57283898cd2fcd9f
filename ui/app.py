"""FastAPI application factory."""

import asyncio
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from config import load_config
from core.errors import InvalidInputError
from core.health import (
    HealthChecker,
    check_event_loop,
    create_engine_check,
    create_logger_check,
)
from internal.logging import get_logger, LogLevel, StructuredLogger, AsyncFileLogger
from rovers.engine import SimulationEngine
from ui.routes import health, rovers
from utils.crash import create_async_handler
from utils.ksuid import generate_ksuid

VERSION = "1.0.0"

INVALID_INPUT_MESSAGE = "Invalid input format or processing error"
INPUT_REQUIRED_MESSAGE = "Input is required"
NOT_FOUND_MESSAGE = "Route not found"
SERVER_ERROR_MESSAGE = "Something went wrong!"


def error_response(status_code, message, request_id=None):
    headers = {"X-Request-ID": request_id} if request_id else None
    return JSONResponse(status_code=status_code, content={"error": message}, headers=headers)


def create_app(config=None):
    """Create and configure the FastAPI application."""
    config = config or load_config()

    StructuredLogger.configure(min_level=LogLevel.parse(config.logging.level, LogLevel.INFO))
    logger_instance = get_logger()

    engine = SimulationEngine(config=config.rovers)
    file_logger = AsyncFileLogger(file_path=config.logging.file)

    health_checker = HealthChecker()
    health_checker.register("event_loop", check_event_loop, critical=True)
    health_checker.register("simulation_engine", create_engine_check(engine), critical=True)
    health_checker.register("audit_logger", create_logger_check(file_logger), critical=False)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger_instance.info("Application starting", version=VERSION)
        loop = asyncio.get_running_loop()
        loop.set_exception_handler(create_async_handler(logger_instance))
        await file_logger.start()
        logger_instance.info("Application started successfully",
                             host=config.server.host, port=config.server.port)

        yield

        logger_instance.info("Application shutting down")
        await file_logger.stop()
        logger_instance.info("Application shutdown complete", audit=file_logger.get_stats())

    app = FastAPI(
        title="Mars Rovers",
        version=VERSION,
        description="Simulates rovers driving on a rectangular plateau",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors.allow_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def request_id(request: Request, call_next):
        request.state.request_id = generate_ksuid()
        response = await call_next(request)
        response.headers["X-Request-ID"] = request.state.request_id
        return response

    @app.exception_handler(InvalidInputError)
    async def invalid_input(request: Request, exc: InvalidInputError):
        req_id = getattr(request.state, "request_id", None)
        logger_instance.warn("Invalid rover input", error=exc, request_id=req_id, **exc.context)
        file_logger.try_log("rejected", {"request_id": req_id, **exc.to_dict()})
        return error_response(400, INVALID_INPUT_MESSAGE, req_id)

    @app.exception_handler(RequestValidationError)
    async def invalid_body(request: Request, exc: RequestValidationError):
        req_id = getattr(request.state, "request_id", None)
        logger_instance.debug("Request body rejected", request_id=req_id, errors=exc.errors())
        return error_response(400, INPUT_REQUIRED_MESSAGE, req_id)

    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: StarletteHTTPException):
        message = NOT_FOUND_MESSAGE if exc.status_code == 404 else exc.detail
        return error_response(exc.status_code, message, getattr(request.state, "request_id", None))

    @app.exception_handler(Exception)
    async def unhandled(request: Request, exc: Exception):
        logger_instance.error("Unhandled error", error=exc, path=request.url.path,
                              request_id=getattr(request.state, "request_id", None))
        return error_response(500, SERVER_ERROR_MESSAGE)

    health.init(health_checker)
    rovers.init(engine, file_logger)

    app.include_router(health.router)
    app.include_router(rovers.router)

    return app
