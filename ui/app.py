"""FastAPI application factory."""

import asyncio
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from config import load_config
from core.errors import BaseTuidError
from core.health import (
    HealthChecker,
    check_clock,
    check_codec,
    check_event_loop,
    create_ledger_check,
    create_minter_check,
)
from core.minter import Minter
from internal.logging import AsyncFileLogger, LogLevel, StructuredLogger
from ui import auth
from ui.routes import api, health, tuids
from utils.crash import create_async_handler

VERSION = "1.0.0"


def create_app(config=None):
    """Create and configure the FastAPI application."""
    config = config or load_config()

    logger = StructuredLogger.configure(min_level=LogLevel.parse(config.logging.level, LogLevel.INFO))

    ledger = AsyncFileLogger(file_path=config.logging.file)
    minter = Minter(max_batch=config.api.max_batch, ledger=ledger)
    health_checker = HealthChecker()
    health_checker.register("event_loop", check_event_loop, critical=True)
    health_checker.register("codec", check_codec, critical=True)
    health_checker.register("clock", check_clock, critical=True)
    health_checker.register("minter", create_minter_check(minter), critical=True)
    health_checker.register("ledger", create_ledger_check(ledger), critical=False)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Application starting", version=VERSION)
        loop = asyncio.get_running_loop()
        loop.set_exception_handler(create_async_handler(logger))

        await ledger.start()
        logger.info("Application started successfully", ledger=config.logging.file)

        yield

        logger.info("Application shutting down")
        await ledger.stop()
        logger.info("Application shutdown complete", **minter.get_stats())

    app = FastAPI(
        title="TUID Service",
        version=VERSION,
        description="time-based unique identifiers",
        lifespan=lifespan,
    )

    @app.exception_handler(BaseTuidError)
    async def tuid_error_handler(request: Request, exc: BaseTuidError):
        logger.warn("Request rejected", error=exc, path=request.url.path)
        return JSONResponse(status_code=400, content=exc.to_dict())

    # Initialize route modules with dependencies
    auth.init(config.api)
    tuids.init(minter)
    api.init(minter, ledger)
    health.init(minter, health_checker)

    app.include_router(tuids.router)
    app.include_router(api.router)
    app.include_router(health.router)

    return app
