"""Pydantic response models for the API."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel


class StationResponse(BaseModel):
    station_name: str | None = None
    station_id: int | None = None
    climate_id: str | None = None
    prov: str | None = None
    lat: float | None = None
    lon: float | None = None
    elev: float | None = None
    tz: str | None = None
    station_type: str | None = None
    first_date: str | None = None
    last_date: str | None = None
    has_daily: bool = False
    has_hourly: bool = False
    has_monthly: bool = False
    has_normals: bool = False
    distance: float | None = None


class UnitErrorResponse(BaseModel):
    unit: str
    error: str


class RowsResponse(BaseModel):
    """Variable-schema rows plus per-station failures."""

    count: int
    rows: list[dict[str, Any]]
    errors: list[UnitErrorResponse] = []
