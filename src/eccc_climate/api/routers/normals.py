"""Climate normals endpoint."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from eccc_climate.api.deps import get_client
from eccc_climate.api.routers.observations import rows_response
from eccc_climate.api.schemas import RowsResponse
from eccc_climate.client import ClimateClient

router = APIRouter()


@router.get("/{climate_id}", response_model=RowsResponse)
def get_normals(
    climate_id: str,
    period: str = Query("current", description="current, 1991-2020, 1981-2010 or 1971-2000"),
    client: ClimateClient = Depends(get_client),
) -> RowsResponse:
    return rows_response(client.download_normals(climate_id, period))
