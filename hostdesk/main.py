"""
HostDesk - restaurant floor console API
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import structlog

from hostdesk import __version__
from hostdesk.api import auth, floor, layouts, reservations, waitlist
from hostdesk.auth.session import StaffSession
from hostdesk.client.api import RestaurantApiClient
from hostdesk.config import settings
from hostdesk.errors import ApiError, CommandInProgressError, SelectionError
from hostdesk.floor.view import FloorConsole

# Configure structured logging
logging.basicConfig(format="%(message)s", level=settings.log_level.upper())

structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.dev.ConsoleRenderer()
        if settings.log_format == "console"
        else structlog.processors.JSONRenderer(),
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager"""
    logger.info("Starting HostDesk", version=__version__, api_base_url=settings.api_base_url)

    client = RestaurantApiClient(settings.api_base_url, timeout=settings.api_timeout)
    session = StaffSession(settings.session_file, client)
    console = FloorConsole(client, settings)
    app.state.client = client
    app.state.session = session
    app.state.console = console

    if session.load() is not None:
        try:
            await console.refresh()
        except ApiError as e:
            logger.warning("Initial floor refresh failed", error=str(e), status_code=e.status_code)

    yield

    await client.close()
    logger.info("Shutting down HostDesk")


# Create FastAPI application
app = FastAPI(
    title="HostDesk",
    description="Front-of-house floor console for restaurant staff",
    version=__version__,
    lifespan=lifespan,
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(CommandInProgressError)
async def command_in_progress_handler(request: Request, exc: CommandInProgressError):
    return JSONResponse(status_code=409, content={"detail": str(exc)})


@app.exception_handler(SelectionError)
async def selection_error_handler(request: Request, exc: SelectionError):
    return JSONResponse(status_code=422, content={"detail": str(exc)})


@app.exception_handler(ApiError)
async def api_error_handler(request: Request, exc: ApiError):
    logger.error("Restaurant API error", path=request.url.path, status_code=exc.status_code, error=str(exc))
    return JSONResponse(status_code=502, content={"detail": str(exc)})


# Health check endpoint
@app.get("/health")
async def health():
    """Basic health check"""
    return {"status": "healthy", "service": "hostdesk", "version": __version__}


# Include API routers
app.include_router(auth.router, prefix="/auth", tags=["Authentication"])
app.include_router(floor.router, prefix="/floor", tags=["Floor"])
app.include_router(reservations.router, prefix="/reservations", tags=["Reservations"])
app.include_router(waitlist.router, prefix="/waitlist", tags=["Waitlist"])
app.include_router(layouts.router, prefix="/layouts", tags=["Layouts"])


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "hostdesk.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_debug,
    )
