"""FastAPI application factory."""

from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from eccc_climate.client import ClimateClient
from eccc_climate.config import ClimateConfig
from eccc_climate.errors import InvalidArgument, NotFound, TransportError


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Build a client from the environment unless one was injected."""
    if getattr(app.state, "client", None) is None:
        app.state.client = ClimateClient(ClimateConfig.from_env())
    yield


def create_app(client: ClimateClient | None = None) -> FastAPI:
    app = FastAPI(
        title="ECCC Climate API",
        version="0.1.0",
        description="Station search, observations and normals from MSC GeoMet",
        lifespan=lifespan,
    )
    app.state.client = client

    @app.exception_handler(InvalidArgument)
    async def invalid_argument(request: Request, exc: InvalidArgument):
        return JSONResponse(status_code=422, content={"detail": str(exc)})

    @app.exception_handler(NotFound)
    async def not_found(request: Request, exc: NotFound):
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    @app.exception_handler(TransportError)
    async def upstream_error(request: Request, exc: TransportError):
        return JSONResponse(status_code=502, content={"detail": str(exc)})

    from eccc_climate.api.routers import normals, observations, stations, variables

    app.include_router(stations.router, prefix="/stations", tags=["stations"])
    app.include_router(observations.router, prefix="/observations", tags=["observations"])
    app.include_router(normals.router, prefix="/normals", tags=["normals"])
    app.include_router(variables.router, prefix="/variables", tags=["variables"])

    @app.get("/health")
    def health():
        return {"status": "ok"}

    return app
