"""FastAPI dependency injection."""

from __future__ import annotations

from fastapi import Request

from eccc_climate.client import ClimateClient


def get_client(request: Request) -> ClimateClient:
    return request.app.state.client
