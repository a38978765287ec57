"""Observation download endpoint."""

from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Depends, Query

from eccc_climate.api.deps import get_client
from eccc_climate.api.schemas import RowsResponse, UnitErrorResponse
from eccc_climate.client import ClimateClient
from eccc_climate.results import BatchResult

router = APIRouter()


def rows_response(result: BatchResult) -> RowsResponse:
    return RowsResponse(
        count=len(result.rows),
        rows=result.rows,
        errors=[UnitErrorResponse(unit=str(e.unit), error=str(e.error)) for e in result.errors],
    )


@router.get("", response_model=RowsResponse)
def get_observations(
    start: date = Query(...),
    end: date = Query(...),
    climate_id: list[str] | None = Query(None),
    station_id: list[int] | None = Query(None),
    name: list[str] | None = Query(None),
    interval: str = Query("day"),
    trim: bool = Query(False),
    client: ClimateClient = Depends(get_client),
) -> RowsResponse:
    """Download observations for the selected stations over [start, end]."""
    result = client.download_observations(
        station_ids=station_id,
        climate_ids=climate_id,
        station_names=name,
        start=start,
        end=end,
        interval=interval,
        trim=trim,
        verbose=False,
    )
    return rows_response(result)
