# ABOUTME: FastAPI application exposing the aggregated read endpoints
# ABOUTME: Maps total cache+upstream failure to 500 and unknown paths to a 404 payload

import time
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from crewbase.aggregator import AggregationError, Aggregator
from crewbase.models import RoleCatalog, SheetTab, VideoRecord
from crewbase.utils.logging import get_logger

logger = get_logger(__name__)


def create_app(aggregator: Aggregator, preload: bool = True) -> FastAPI:
    """Build the API around ``aggregator``.

    Args:
        aggregator: Cache-backed source orchestration shared by all requests
        preload: Warm the video and spreadsheet caches on startup
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if preload:
            await aggregator.preload()
        logger.info("API started")
        yield
        await aggregator.close()
        logger.info("API stopped")

    app = FastAPI(title="crewbase", lifespan=lifespan)
    app.state.aggregator = aggregator
    app.add_middleware(CORSMiddleware, allow_origins=["*"], allow_methods=["*"], allow_headers=["*"])

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start_time = time.time()
        response = await call_next(request)
        logger.info(
            "HTTP request",
            method=request.method,
            path=request.url.path,
            status=response.status_code,
            content_length=response.headers.get("content-length"),
            duration_ms=round((time.time() - start_time) * 1000, 1),
        )
        return response

    @app.exception_handler(AggregationError)
    async def aggregation_failed(request: Request, exc: AggregationError):
        logger.error("No data to serve", path=request.url.path, error=str(exc))
        return JSONResponse(status_code=500, content={"error": str(exc)})

    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: StarletteHTTPException):
        if exc.status_code == 404:
            return JSONResponse(status_code=404, content={"error": "unknown endpoint"})
        return JSONResponse(status_code=exc.status_code, content={"error": exc.detail})

    @app.get("/api/videos", response_model=list[VideoRecord])
    async def get_videos():
        """Playlist videos annotated with players, roles and maps."""
        return await aggregator.get_videos()

    @app.get("/api/sheetData", response_model=list[SheetTab])
    async def get_sheet_data():
        """Rows of every configured spreadsheet tab."""
        return await aggregator.get_sheet_data()

    @app.get("/api/roles", response_model=RoleCatalog)
    async def get_roles():
        """Role catalog merged from every role document."""
        return await aggregator.get_roles()

    @app.get("/api/reset")
    async def reset_cache():
        """Clear every cached source, in memory and on disk."""
        aggregator.reset()
        return {"message": "Cache cleared"}

    @app.get("/api/cache")
    async def cache_status():
        """Per-source cache age and staleness."""
        return aggregator.cache_status()

    return app


async def run_server(aggregator: Aggregator, host: str = "0.0.0.0", port: int = 3001) -> None:
    """Serve the API until interrupted."""
    app = create_app(aggregator)
    server = uvicorn.Server(uvicorn.Config(app, host=host, port=port, log_config=None))
    await server.serve()
