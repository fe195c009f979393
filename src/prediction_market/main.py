"""Main module for the prediction market service."""
import logging
import os
import re
import subprocess
import sys
from contextlib import asynccontextmanager
from pathlib import Path

import uvicorn
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from prediction_market.container import init_container
from prediction_market.routers import (bets_router, chain_router,
                                       markets_router, network_router,
                                       portfolio_router)

logger = logging.getLogger(__name__)

API_PREFIX = "/api"

# (method, path pattern, message) for request validation failures.
_INVALID_DATA_MESSAGES: tuple[tuple[str, re.Pattern[str], str], ...] = (
    ("POST", re.compile(r"^/api/markets/?$"), "Invalid market data"),
    ("PATCH", re.compile(r"^/api/markets/[^/]+/?$"), "Invalid update data"),
    ("POST", re.compile(r"^/api/bets/?$"), "Invalid bet data"),
    ("PATCH", re.compile(r"^/api/bets/[^/]+/settle/?$"), "Invalid settlement data"),
)


@asynccontextmanager
async def lifespan(fastapi_app: FastAPI):
    """Build storage and services at startup; close them on shutdown."""
    container = init_container()
    logger.info("Starting with %s storage", container.config.storage_backend())

    fastapi_app.state.container = container
    fastapi_app.state.markets_service = container.markets_service()
    fastapi_app.state.bets_service = container.bets_service()
    fastapi_app.state.chain_service = container.chain_service()

    # Keep resource refs for clean shutdown
    fastapi_app.state.resources_to_close = [
        container.storage(),
        fastapi_app.state.chain_service,
    ]

    yield

    for resource in fastapi_app.state.resources_to_close:
        try:
            await resource.close()
        except Exception as exc:  # pylint: disable=broad-except
            logger.warning("Error closing %s: %s", type(resource).__name__, exc)


app = FastAPI(
    title="Prediction Market API",
    description="Markets, private bets and portfolio stats with optional on-chain metadata",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS for the browser client
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET", "POST", "PATCH", "OPTIONS"],
    allow_headers=["Content-Type"],
)


def _invalid_data_message(request: Request) -> str:
    for method, pattern, message in _INVALID_DATA_MESSAGES:
        if request.method == method and pattern.match(request.url.path):
            return message
    return "Invalid data"


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Validation failures are 400s with the field errors under details."""
    return JSONResponse(
        status_code=400,
        content={
            "error": _invalid_data_message(request),
            "details": jsonable_encoder(exc.errors()),
        },
    )


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Render every HTTP error as {"error": ...}."""
    if exc.status_code == 405:
        message = "Method not allowed"
    else:
        message = exc.detail if isinstance(exc.detail, str) else str(exc.detail)
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": message},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


# Include routers
app.include_router(markets_router, prefix=API_PREFIX)
app.include_router(bets_router, prefix=API_PREFIX)
app.include_router(portfolio_router, prefix=API_PREFIX)
app.include_router(network_router, prefix=API_PREFIX)
app.include_router(chain_router, prefix=API_PREFIX)


@app.get("/")
def health():
    """Return health check status."""
    return {"status": "ok"}


def setup_logging() -> None:
    """Configure root logging from LOG_LEVEL (default INFO)."""
    logging.basicConfig(
        level=os.getenv("LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def run():
    """Run the server (uvicorn). Use for `poetry run start`."""
    setup_logging()
    uvicorn.run(
        "prediction_market.main:app",
        host=os.getenv("HOST", "127.0.0.1"),
        port=int(os.getenv("PORT", "8001")),
    )


def run_dev():
    """Run the development server against Postgres started via Docker."""
    setup_logging()
    project_root = Path(__file__).resolve().parent.parent.parent
    try:
        subprocess.run(
            ["docker", "compose", "up", "-d", "postgres"],
            cwd=project_root,
            capture_output=True,
            text=True,
            check=True,
        )
    except subprocess.CalledProcessError as e:
        print("Failed to start Postgres:", e.stderr or e.stdout, file=sys.stderr)
        sys.exit(1)
    os.environ.setdefault("STORAGE_BACKEND", "sql")
    uvicorn.run("prediction_market.main:app", host="0.0.0.0", port=8000, reload=True)
