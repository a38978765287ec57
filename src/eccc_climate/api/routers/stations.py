"""Station discovery endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query

from eccc_climate.api.deps import get_client
from eccc_climate.api.schemas import StationResponse
from eccc_climate.client import ClimateClient

router = APIRouter()


@router.get("/search", response_model=list[StationResponse])
def search(
    name: str | None = Query(None, description="Substring of the station name"),
    climate_id: list[str] | None = Query(None),
    station_id: list[int] | None = Query(None),
    prov: str | None = Query(None, description="Province/territory code, e.g. BC"),
    interval: str | None = Query(None, description="hour, day or month"),
    has_normals: bool | None = Query(None),
    lat: float | None = Query(None),
    lon: float | None = Query(None),
    dist: float | None = Query(None, description="Search radius in km"),
    client: ClimateClient = Depends(get_client),
) -> list[StationResponse]:
    """Search the cached station list; all supplied filters must match."""
    coords = None
    if lat is not None or lon is not None:
        if lat is None or lon is None:
            raise HTTPException(status_code=422, detail="lat and lon must be given together")
        coords = (lat, lon)

    index = client.station_index()
    found = index.search(
        name=name,
        climate_id=climate_id,
        station_id=station_id,
        prov=prov,
        interval=interval,
        has_normals=has_normals,
        coords=coords,
        dist=dist,
    )
    return [StationResponse(**r) for r in index.records(found)]


@router.get("/{climate_id}", response_model=StationResponse)
def get_station_detail(
    climate_id: str,
    client: ClimateClient = Depends(get_client),
) -> StationResponse:
    """Get details for one station by climate identifier."""
    index = client.station_index()
    found = index.search(climate_id=climate_id)
    if found.empty:
        raise HTTPException(status_code=404, detail=f"Climate ID {climate_id} not found")
    return StationResponse(**index.records(found)[0])
